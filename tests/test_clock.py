import unittest

from box_breathing.clock import IDLE, PAUSED, PLAYING, BreathClock, TkScheduler
from box_breathing.phases import EXHALE, HOLD, INHALE


class ManualScheduler:
    """Frames fire only when the test calls fire(timestamp_ms)."""

    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self._next = 0

    def schedule(self, callback):
        self._next += 1
        self.pending[self._next] = callback
        return self._next

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def fire(self, timestamp_ms):
        for handle in list(self.pending):
            self.pending.pop(handle)(timestamp_ms)


class FakeWidget:
    def __init__(self):
        self.after_calls = []
        self.cancelled = []

    def after(self, ms, fn):
        self.after_calls.append((ms, fn))
        return f"after#{len(self.after_calls)}"

    def after_cancel(self, handle):
        self.cancelled.append(handle)


class TestBreathClock(unittest.TestCase):
    def setUp(self) -> None:
        self.sched = ManualScheduler()
        self.clock = BreathClock(self.sched)

    def test_starts_idle(self) -> None:
        self.assertEqual(self.clock.state, IDLE)
        self.assertEqual(self.clock.elapsed, 0.0)
        self.assertFalse(self.clock.playing)
        self.assertTrue(self.clock.idle)
        self.assertEqual(self.clock.current_instruction(), INHALE)
        self.assertEqual(self.clock.current_level(), 0.0)

    def test_elapsed_follows_timestamps(self) -> None:
        self.clock.play()
        self.assertEqual(self.clock.state, PLAYING)
        self.sched.fire(1000.0)
        self.assertEqual(self.clock.elapsed, 0.0)
        self.sched.fire(3500.0)
        self.assertEqual(self.clock.elapsed, 2.5)
        # Irregular cadence: elapsed is a wall-clock delta, not a frame count
        self.sched.fire(3501.0)
        self.sched.fire(9000.0)
        self.assertEqual(self.clock.elapsed, 8.0)
        self.assertEqual(self.clock.current_instruction(), EXHALE)

    def test_play_does_not_double_schedule(self) -> None:
        self.clock.play()
        self.clock.play()
        self.assertEqual(len(self.sched.pending), 1)
        self.sched.fire(0.0)
        self.clock.play()
        self.assertEqual(len(self.sched.pending), 1)

    def test_pause_cancels_pending_frame(self) -> None:
        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(2000.0)
        self.clock.pause()
        self.assertEqual(self.sched.pending, {})
        self.assertEqual(self.clock.state, PAUSED)
        self.assertEqual(self.clock.elapsed, 2.0)

    def test_pause_is_idempotent(self) -> None:
        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(1500.0)
        self.clock.pause()
        once = (self.clock.state, self.clock.elapsed, self.clock.playing)
        self.clock.pause()
        self.assertEqual((self.clock.state, self.clock.elapsed, self.clock.playing), once)
        self.assertEqual(len(self.sched.cancelled), 1)

    def test_resume_continues_from_stored_elapsed(self) -> None:
        self.clock.play()
        self.sched.fire(1000.0)
        self.sched.fire(3500.0)   # t1 = 2.5
        self.clock.pause()
        self.clock.play()         # long gap while paused is not counted
        self.sched.fire(60000.0)
        self.assertEqual(self.clock.elapsed, 2.5)
        self.sched.fire(62000.0)  # t2 = 2.0
        self.assertEqual(self.clock.elapsed, 4.5)
        self.assertEqual(self.clock.current_instruction(), HOLD)

    def test_reset_from_any_state(self) -> None:
        self.clock.reset()
        self.assertEqual((self.clock.elapsed, self.clock.playing), (0.0, False))

        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(5000.0)
        self.clock.reset()
        self.assertEqual((self.clock.elapsed, self.clock.playing), (0.0, False))
        self.assertEqual(self.clock.state, IDLE)
        self.assertEqual(self.sched.pending, {})

        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(3000.0)
        self.clock.pause()
        self.clock.reset()
        self.assertEqual(self.clock.state, IDLE)
        self.assertEqual(self.clock.elapsed, 0.0)

    def test_play_after_reset_counts_from_zero(self) -> None:
        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(7000.0)
        self.clock.reset()
        self.clock.play()
        self.sched.fire(100000.0)
        self.sched.fire(101000.0)
        self.assertEqual(self.clock.elapsed, 1.0)

    def test_stale_frame_after_pause_is_ignored(self) -> None:
        self.clock.play()
        self.sched.fire(0.0)
        stale = next(iter(self.sched.pending.values()))
        self.clock.pause()
        stale(9000.0)
        self.assertEqual(self.clock.elapsed, 0.0)
        self.assertFalse(self.clock.playing)
        self.assertEqual(self.sched.pending, {})

    def test_pause_before_first_frame_stays_idle(self) -> None:
        self.clock.play()
        self.clock.pause()
        self.assertEqual(self.clock.state, IDLE)

    def test_derived_reads(self) -> None:
        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(17500.0)
        self.assertEqual(self.clock.completed_cycles(), 1)
        self.assertAlmostEqual(self.clock.cycle_offset(), 1.5)
        self.assertAlmostEqual(self.clock.current_level(), 1.5 / 4)
        self.sched.fire(20000.0)
        self.assertEqual(self.clock.cycle_offset(), 4.0)
        self.assertEqual(self.clock.completed_cycles(), 1)
        self.assertEqual(self.clock.current_instruction(), HOLD)
        self.assertEqual(self.clock.current_level(), 1.0)

    def test_toggle(self) -> None:
        self.clock.toggle()
        self.assertTrue(self.clock.playing)
        self.sched.fire(0.0)
        self.sched.fire(1000.0)
        self.clock.toggle()
        self.assertEqual(self.clock.state, PAUSED)

    def test_listeners_see_every_change(self) -> None:
        seen = []
        self.clock.add_listener(lambda c: seen.append((c.state, c.elapsed)))
        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(500.0)
        self.clock.pause()
        self.clock.reset()
        self.assertEqual(seen, [(PLAYING, 0.0), (PLAYING, 0.0), (PLAYING, 0.5),
                                (PAUSED, 0.5), (IDLE, 0.0)])

    def test_remove_listener(self) -> None:
        seen = []
        listener = seen.append
        self.clock.add_listener(listener)
        self.clock.remove_listener(listener)
        self.clock.play()
        self.assertEqual(seen, [])

    def test_independent_instances(self) -> None:
        other = BreathClock(ManualScheduler())
        self.clock.play()
        self.sched.fire(0.0)
        self.sched.fire(3000.0)
        self.assertEqual(other.elapsed, 0.0)
        self.assertEqual(other.state, IDLE)


class TestTkScheduler(unittest.TestCase):
    def test_schedules_on_widget_after(self) -> None:
        widget = FakeWidget()
        sched = TkScheduler(widget, interval_ms=16, now=lambda: 2.5)
        seen = []
        handle = sched.schedule(seen.append)
        self.assertEqual(handle, "after#1")
        ms, fn = widget.after_calls[0]
        self.assertEqual(ms, 16)
        fn()
        self.assertEqual(seen, [2500.0])
        sched.cancel(handle)
        self.assertEqual(widget.cancelled, ["after#1"])

    def test_drives_clock(self) -> None:
        widget = FakeWidget()
        now = [10.0]
        clock = BreathClock(TkScheduler(widget, now=lambda: now[0]))
        clock.play()
        widget.after_calls[-1][1]()
        now[0] = 13.0
        widget.after_calls[-1][1]()
        self.assertAlmostEqual(clock.elapsed, 3.0)
        clock.pause()
        self.assertEqual(widget.cancelled, [f"after#{len(widget.after_calls)}"])


if __name__ == "__main__":
    unittest.main()
