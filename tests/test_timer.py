"""
Tests for the countdown timer and its state snapshots.
"""

import asyncio

import pytest

from timed_interview.orchestrator import CountdownTimer, TimerState


class TestCountdownTimer:
    """Tests for CountdownTimer on a manual clock."""

    @pytest.fixture
    def events(self) -> dict[str, list]:
        return {"ticks": [], "expired": []}

    @pytest.fixture
    def timer(self, events: dict[str, list]) -> CountdownTimer:
        """Create a timer that only moves when ticked."""
        return CountdownTimer(
            tick_interval=None,
            on_tick=events["ticks"].append,
            on_expired=lambda: events["expired"].append(True),
        )

    def test_start_sets_budget(self, timer: CountdownTimer) -> None:
        timer.start(20)

        assert timer.is_running
        assert timer.state == TimerState(remaining=20, total=20)

    def test_start_rejects_non_positive_duration(self, timer: CountdownTimer) -> None:
        with pytest.raises(ValueError):
            timer.start(0)
        assert not timer.is_running

    def test_ticks_count_down(self, timer: CountdownTimer, events: dict[str, list]) -> None:
        timer.start(5)
        for _ in range(3):
            timer.tick()

        assert timer.remaining == 2
        assert [s.remaining for s in events["ticks"]] == [4, 3, 2]
        assert events["expired"] == []

    def test_expires_exactly_once(self, timer: CountdownTimer, events: dict[str, list]) -> None:
        """Test that ticks after expiry are ignored."""
        timer.start(3)
        for _ in range(10):
            timer.tick()

        assert events["expired"] == [True]
        assert len(events["ticks"]) == 3
        assert timer.remaining == 0
        assert not timer.is_running

    def test_stop_suppresses_expiry(self, timer: CountdownTimer, events: dict[str, list]) -> None:
        timer.start(2)
        timer.tick()
        timer.stop()
        timer.tick()
        timer.tick()

        assert timer.remaining == 1
        assert events["expired"] == []

    def test_reset_zeroes_state(self, timer: CountdownTimer) -> None:
        timer.start(60)
        timer.tick()
        timer.reset()

        assert timer.state == TimerState()
        assert not timer.is_running

    def test_restart_after_expiry(self, timer: CountdownTimer, events: dict[str, list]) -> None:
        timer.start(1)
        timer.tick()
        timer.start(2)
        timer.tick()
        timer.tick()

        assert events["expired"] == [True, True]

    def test_invalid_interval(self) -> None:
        with pytest.raises(ValueError):
            CountdownTimer(tick_interval=0)

    def test_failing_tick_callback_does_not_stop_countdown(self) -> None:
        """Test that an exception from on_tick is logged and expiry still fires once."""
        expired: list[bool] = []

        def broken_display(state: TimerState) -> None:
            raise RuntimeError("render failed")

        timer = CountdownTimer(
            tick_interval=None,
            on_tick=broken_display,
            on_expired=lambda: expired.append(True),
        )
        timer.start(3)
        for _ in range(5):
            timer.tick()

        assert timer.remaining == 0
        assert not timer.is_running
        assert expired == [True]


class TestCountdownTimerOnLoop:
    """Tests for the self-driving timer task."""

    @pytest.mark.asyncio
    async def test_runs_to_expiry(self) -> None:
        expired = asyncio.Event()
        ticks: list[TimerState] = []
        timer = CountdownTimer(tick_interval=0.001, on_tick=ticks.append, on_expired=expired.set)

        timer.start(3)
        await asyncio.wait_for(expired.wait(), timeout=2)

        assert [t.remaining for t in ticks] == [2, 1, 0]
        assert not timer.is_running

    @pytest.mark.asyncio
    async def test_failing_tick_callback_on_loop(self) -> None:
        """Test that the ticking task survives a callback that raises mid-countdown."""
        expired = asyncio.Event()

        def flaky_display(state: TimerState) -> None:
            if state.remaining == 10:
                raise RuntimeError("render failed")

        timer = CountdownTimer(tick_interval=0.001, on_tick=flaky_display, on_expired=expired.set)

        timer.start(20)
        await asyncio.wait_for(expired.wait(), timeout=2)

        assert timer.remaining == 0
        assert not timer.is_running

    @pytest.mark.asyncio
    async def test_stop_cancels_ticking(self) -> None:
        ticks: list[TimerState] = []
        timer = CountdownTimer(tick_interval=0.01, on_tick=ticks.append)

        timer.start(10)
        timer.stop()
        await asyncio.sleep(0.05)

        assert ticks == []
        assert timer.remaining == 10

    @pytest.mark.asyncio
    async def test_restart_replaces_previous_countdown(self) -> None:
        expired = asyncio.Event()
        ticks: list[TimerState] = []
        timer = CountdownTimer(tick_interval=0.001, on_tick=ticks.append, on_expired=expired.set)

        timer.start(50)
        timer.start(2)
        await asyncio.wait_for(expired.wait(), timeout=2)

        assert [t.total for t in ticks] == [2, 2]


class TestTimerState:
    """Tests for the TimerState display helpers."""

    def test_percentage_and_thresholds(self) -> None:
        state = TimerState(remaining=18, total=60)

        assert state.percentage == pytest.approx(30.0)
        assert state.is_warning
        assert not state.is_danger

    def test_danger_threshold(self) -> None:
        state = TimerState(remaining=2, total=20)

        assert state.is_warning
        assert state.is_danger

    def test_idle_timer_raises_no_alerts(self) -> None:
        state = TimerState()

        assert state.percentage == 0.0
        assert not state.is_warning
        assert not state.is_danger

    def test_clock(self) -> None:
        assert TimerState(remaining=120, total=120).clock() == "2:00"
        assert TimerState(remaining=65, total=120).clock() == "1:05"
        assert TimerState(remaining=9, total=20).clock() == "0:09"
