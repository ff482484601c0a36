import pytest

from neureset.events import Clock, ElapsedTimer, Signal, Timer


def test_signal_calls_slots_in_order_with_arguments():
    calls = []
    signal = Signal()
    signal.connect(lambda x: calls.append(("first", x)))
    signal.connect(lambda x: calls.append(("second", x)))
    signal.emit("value")
    assert calls == [("first", "value"), ("second", "value")]


def test_signal_disconnect_stops_delivery():
    calls = []
    signal = Signal()
    slot = calls.append
    signal.connect(slot)
    signal.disconnect(slot)
    signal.emit(1)
    assert calls == []
    with pytest.raises(ValueError):
        signal.disconnect(slot)


def test_signal_disconnect_unknown_raises():
    with pytest.raises(ValueError):
        Signal().disconnect(print)


def test_clock_advances():
    clock = Clock()
    clock.advance(250)
    clock.advance(750)
    assert clock.now() == 1000


def test_clock_refuses_negative_advance():
    with pytest.raises(ValueError):
        Clock().advance(-1)


def test_repeating_timer_fires_at_each_interval():
    clock = Clock()
    timer = Timer(clock, 1000)
    fired = []
    timer.timeout.connect(lambda: fired.append(clock.now()))
    timer.start()
    clock.advance(3500)
    assert fired == [1000, 2000, 3000]
    assert timer.is_active()
    assert clock.now() == 3500


def test_single_shot_timer_fires_once():
    clock = Clock()
    timer = Timer(clock, single_shot=True)
    fired = []
    timer.timeout.connect(lambda: fired.append(clock.now()))
    timer.start(500)
    clock.advance(5000)
    assert fired == [500]
    assert not timer.is_active()


def test_stopped_timer_does_not_fire():
    clock = Clock()
    timer = Timer(clock, 100)
    fired = []
    timer.timeout.connect(lambda: fired.append(1))
    timer.start()
    timer.stop()
    clock.advance(1000)
    assert fired == []
    assert not timer.is_active()


def test_slot_can_stop_its_own_timer():
    clock = Clock()
    timer = Timer(clock, 100)
    fired = []

    def slot():
        fired.append(clock.now())
        timer.stop()

    timer.timeout.connect(slot)
    timer.start()
    clock.advance(1000)
    assert fired == [100]
    assert not timer.is_active()
    assert clock.now() == 1000


def test_timers_fire_in_deadline_order():
    clock = Clock()
    order = []
    slow = Timer(clock, 300, single_shot=True)
    fast = Timer(clock, 100, single_shot=True)
    slow.timeout.connect(lambda: order.append("slow"))
    fast.timeout.connect(lambda: order.append("fast"))
    slow.start()
    fast.start()
    clock.advance(1000)
    assert order == ["fast", "slow"]


def test_repeating_timer_rejects_zero_interval():
    with pytest.raises(ValueError):
        Timer(Clock()).start(0)


def test_timer_rejects_negative_interval():
    with pytest.raises(ValueError):
        Timer(Clock(), single_shot=True).start(-5)


def test_elapsed_timer_measures_clock_time():
    clock = Clock()
    elapsed = ElapsedTimer(clock)
    elapsed.start()
    clock.advance(1234)
    assert elapsed.elapsed() == 1234


def test_elapsed_timer_restart_returns_previous_and_resets():
    clock = Clock()
    elapsed = ElapsedTimer(clock)
    elapsed.start()
    clock.advance(400)
    assert elapsed.restart() == 400
    assert elapsed.elapsed() == 0


def test_elapsed_timer_unstarted_raises():
    with pytest.raises(RuntimeError):
        ElapsedTimer(Clock()).elapsed()