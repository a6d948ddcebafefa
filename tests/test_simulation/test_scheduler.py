# tests/test_simulation/test_scheduler.py
import asyncio

import pytest

from convsim_core.simulation import (
    AsyncioFrameScheduler, FrameScheduler, ManualFrameScheduler, SimulationClock,
)


class TestManualFrameScheduler:

    def test_satisfies_protocol(self):
        assert isinstance(ManualFrameScheduler(), FrameScheduler)

    def test_step_fires_pending_callbacks_with_timestamps(self):
        scheduler = ManualFrameScheduler(frame_rate_hz=50)
        seen = []
        scheduler.request_frame(seen.append)
        scheduler.request_frame(seen.append)
        assert scheduler.step() == 2
        assert seen == [pytest.approx(20.0), pytest.approx(20.0)]
        assert scheduler.pending_count == 0
        assert scheduler.step() == 0
        assert scheduler.frames_fired == 1

    def test_callbacks_requested_during_a_step_wait_for_the_next(self):
        scheduler = ManualFrameScheduler()
        fired = []

        def chain(ts):
            fired.append(ts)
            if len(fired) < 3:
                scheduler.request_frame(chain)

        scheduler.request_frame(chain)
        scheduler.step()
        assert len(fired) == 1
        assert scheduler.pending_count == 1
        assert scheduler.run_until_idle() == 2
        assert len(fired) == 3

    def test_cancel_frame(self):
        scheduler = ManualFrameScheduler()
        seen = []
        handle = scheduler.request_frame(seen.append)
        scheduler.cancel_frame(handle)
        scheduler.cancel_frame(handle)
        scheduler.cancel_frame(999)
        assert scheduler.step() == 0
        assert seen == []

    def test_run_until_idle_respects_max_frames(self):
        scheduler = ManualFrameScheduler()

        def forever(ts):
            scheduler.request_frame(forever)

        scheduler.request_frame(forever)
        assert scheduler.run_until_idle(max_frames=7) == 7
        assert scheduler.pending_count == 1


class TestAsyncioFrameScheduler:

    def test_fires_and_cancels(self):
        async def scenario():
            scheduler = AsyncioFrameScheduler(frame_rate_hz=1000)
            fired = []
            keep = scheduler.request_frame(lambda ts: fired.append("kept"))
            dropped = scheduler.request_frame(lambda ts: fired.append("dropped"))
            scheduler.cancel_frame(dropped)
            assert scheduler.pending_count == 1
            await asyncio.sleep(0.05)
            return fired, keep, scheduler.pending_count

        fired, keep, pending = asyncio.run(scenario())
        assert fired == ["kept"]
        assert keep == 1
        assert pending == 0

    def test_drives_a_clock_to_completion(self):
        async def scenario():
            scheduler = AsyncioFrameScheduler(frame_rate_hz=1000)
            clock = SimulationClock(scheduler)
            clock.run("small")
            for _ in range(500):
                if not clock.is_running:
                    break
                await asyncio.sleep(0.005)
            return clock

        clock = asyncio.run(scenario())
        assert not clock.is_running
        assert clock.iteration == 50
        assert clock.session.all_converged
