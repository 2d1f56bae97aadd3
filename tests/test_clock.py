from __future__ import annotations

import pytest

from falling_blocks.game.clock import GameClock, Scheduler


def test_call_every_fires_on_each_period():
    scheduler = Scheduler()
    fired = []
    scheduler.call_every("tick", 1000, lambda: fired.append(scheduler.now_ms()))
    scheduler.advance(2500)
    assert fired == [1000, 2000]
    assert scheduler.now_ms() == 2500
    scheduler.advance_to(3000)
    assert fired == [1000, 2000, 3000]


def test_cancelled_handle_never_fires():
    scheduler = Scheduler()
    fired = []
    handle = scheduler.call_every("tick", 100, lambda: fired.append(1))
    handle.cancel()
    scheduler.advance(1000)
    assert fired == []
    assert scheduler.pending() == []


def test_ties_run_in_arming_order_and_cancel_takes_effect_mid_pump():
    scheduler = Scheduler()
    order = []
    second = None

    def first_cb():
        order.append("first")
        second.cancel()

    scheduler.call_every("first", 500, first_cb)
    second = scheduler.call_every("second", 500, lambda: order.append("second"))
    scheduler.advance(1000)
    assert order == ["first", "first"]


def test_interleaves_periods_in_time_order():
    scheduler = Scheduler()
    order = []
    scheduler.call_every("slow", 300, lambda: order.append(("slow", scheduler.now_ms())))
    scheduler.call_every("fast", 200, lambda: order.append(("fast", scheduler.now_ms())))
    scheduler.advance(600)
    assert order == [("fast", 200), ("slow", 300), ("fast", 400), ("slow", 600), ("fast", 600)]


def test_scheduler_rejects_bad_input():
    scheduler = Scheduler(start_ms=100)
    with pytest.raises(ValueError):
        scheduler.call_every("tick", 0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1)
    with pytest.raises(ValueError):
        scheduler.advance_to(50)


def test_game_clock_rearm_replaces_previous_handle():
    scheduler = Scheduler()
    clock = GameClock(scheduler)
    hits = []
    clock.arm_gravity(1000, lambda: hits.append("old"))
    clock.arm_gravity(900, lambda: hits.append("new"))
    clock.arm_elapsed(1000, lambda: None)
    assert clock.gravity_period_ms == 900
    assert sorted(h.name for h in scheduler.pending()) == ["elapsed", "gravity"]
    scheduler.advance(1000)
    assert hits == ["new"]


def test_game_clock_cancel_all():
    scheduler = Scheduler()
    clock = GameClock(scheduler)
    clock.arm_gravity(1000, lambda: None)
    clock.arm_elapsed(1000, lambda: None)
    clock.cancel_all()
    assert not clock.gravity_armed
    assert not clock.elapsed_armed
    assert clock.gravity_period_ms is None
    assert scheduler.pending() == []
