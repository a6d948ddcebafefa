# tests/conftest.py
import pytest
import numpy as np

from convsim_core import (
    ManualFrameScheduler, ProblemGenerator, RecordingSink, SimulationClock,
)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def problem(rng):
    return ProblemGenerator(rng).generate(500.0, 500.0)


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def clock(scheduler, recording_sink, rng):
    return SimulationClock(scheduler, sink=recording_sink, rng=rng, width=500.0, height=500.0)


def step_frames(scheduler: ManualFrameScheduler, count: int):
    """Fires `count` frames on a manual scheduler."""
    for _ in range(count):
        scheduler.step()
