"""Tests for the game session turn loop."""
from __future__ import annotations

import random

import pytest

from wallclimb.animation.base import ArmPose, FramePose
from wallclimb.animation.frames import FrameAnimator
from wallclimb.config.settings import GameSettings
from wallclimb.core.events import EventType
from wallclimb.core.state import TurnOutcome, TurnPhase
from wallclimb.game.holds import HoldGenerator, HoldSide, hold_count
from wallclimb.game.session import GameSession

from conftest import ScriptedGenerator, run_until


def climb_one(session: GameSession) -> None:
    """Press the correct side and play the turn out until READY."""
    session.move(session.hold_queue.active.side)
    run_until(session, lambda s: s.phase is TurnPhase.READY)


def test_initial_state(session, settings):
    assert session.phase is TurnPhase.READY
    assert session.score == 0
    assert session.timer.time_left == settings.max_time_ms
    assert len(session.hold_queue) == hold_count(640, 120) == 8
    assert session.is_day is True


def test_correct_move_resolves_climb(session, settings):
    """Active hold on the left, press left: score 1, resolving, timer reset."""
    session.advance(500)
    assert session.hold_queue.active.side is HoldSide.LEFT

    session.move(HoldSide.LEFT)

    assert session.score == 1
    assert session.phase is TurnPhase.RESOLVING
    assert session.outcome is TurnOutcome.CLIMB
    assert session.timer.time_left == settings.max_time_ms


def test_correct_move_does_not_pop_hold(session):
    before = tuple(session.hold_queue)
    session.move(HoldSide.LEFT)
    assert tuple(session.hold_queue) == before


def test_wrong_move_falls_to_game_over(session):
    """Active hold on the left, press right: fall, then game over, score kept."""
    session.move(HoldSide.RIGHT)

    assert session.phase is TurnPhase.RESOLVING
    assert session.outcome is TurnOutcome.FALL
    assert session.score == 0

    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)
    assert session.score == 0
    assert session.final_score == 0


def test_move_accepts_side_strings(session):
    session.move("left")
    assert session.score == 1


def test_timeout_in_one_tick(session, settings):
    """One tick longer than the budget starts the fall; game over follows."""
    session.advance(settings.max_time_ms + 1)

    assert session.phase is TurnPhase.RESOLVING
    assert session.outcome is TurnOutcome.FALL
    assert session.context.input_side is None
    assert session.animator.pose().fall_side is None

    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)
    assert session.score == 0


def test_scroll_completes_after_duration(session, settings):
    """Scroll deltas summing to the duration rotate the queue by exactly one."""
    session.move(HoldSide.LEFT)
    run_until(session, lambda s: s.phase is TurnPhase.SCROLLING)
    before = tuple(session.hold_queue)

    for _ in range(3):
        session.advance(100)
    assert session.phase is TurnPhase.SCROLLING
    assert session.scroll_offset == pytest.approx(90.0)

    session.advance(100)

    after = tuple(session.hold_queue)
    assert session.phase is TurnPhase.READY
    assert session.scroll_offset == 0.0
    assert after[1:] == before[:-1]
    assert len(after) == len(before)
    assert session.timer.time_left == settings.max_time_ms


def test_same_side_climbs_take_equal_time(session):
    """A second climb to the same side is gated by the full arm animation."""
    assert session.hold_queue.active.side is HoldSide.LEFT
    session.move(HoldSide.LEFT)
    first = run_until(session, lambda s: s.phase is TurnPhase.SCROLLING)
    run_until(session, lambda s: s.phase is TurnPhase.READY)

    assert session.hold_queue.active.side is HoldSide.LEFT
    session.move(HoldSide.LEFT)
    second = run_until(session, lambda s: s.phase is TurnPhase.SCROLLING)

    assert first > 10
    assert second == first


def test_scroll_offset_bounded(session, settings):
    session.move(HoldSide.LEFT)
    run_until(session, lambda s: s.phase is TurnPhase.SCROLLING)
    while session.phase is TurnPhase.SCROLLING:
        session.advance(33)
        assert 0.0 <= session.scroll_offset <= settings.hold_spacing


def test_restart_from_game_over(session, settings):
    """Restart gives a fresh run: score 0, READY, full timer, new queue, neutral pose."""
    climb_one(session)
    session.move(session.hold_queue.active.side.opposite)
    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)
    old_queue = session.hold_queue

    session.restart()

    assert session.score == 0
    assert session.phase is TurnPhase.READY
    assert session.timer.time_left == settings.max_time_ms
    assert session.hold_queue is not old_queue
    assert len(session.hold_queue) == session.queue_length
    assert session.animator.pose() == ArmPose()
    assert session.final_score is None


def test_restart_keeps_best_and_day_night(session):
    climb_one(session)
    session.toggle_day_night()
    session.move(session.hold_queue.active.side.opposite)
    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)

    session.restart()

    assert session.best_score == 1
    assert session.games_played == 1
    assert session.is_day is False


@pytest.mark.parametrize("phase", [TurnPhase.RESOLVING, TurnPhase.SCROLLING, TurnPhase.GAME_OVER])
def test_moves_ignored_outside_ready(session, bus, phase):
    """Moves outside READY change nothing and publish nothing."""
    if phase is TurnPhase.GAME_OVER:
        session.move(HoldSide.RIGHT)
        run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)
    else:
        session.move(HoldSide.LEFT)
        if phase is TurnPhase.SCROLLING:
            run_until(session, lambda s: s.phase is TurnPhase.SCROLLING)
    assert session.phase is phase

    before = session.snapshot()
    events_before = len(bus.get_history(limit=1000))

    session.move(HoldSide.LEFT)
    session.move(HoldSide.RIGHT)

    assert session.snapshot() == before
    assert len(bus.get_history(limit=1000)) == events_before


def test_game_over_is_frozen(session):
    session.move(HoldSide.RIGHT)
    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)
    before = session.snapshot()

    session.advance(10_000)

    assert session.snapshot() == before


def test_scripted_holds_score_and_fail():
    """Matching every hold keeps climbing; one wrong press ends the run at that score."""
    sides = [HoldSide.LEFT, HoldSide.RIGHT] * 20
    session = GameSession(GameSettings(), generator=ScriptedGenerator(sides))

    for expected in range(1, 6):
        session.move(session.hold_queue.active.side)
        assert session.score == expected
        run_until(session, lambda s: s.phase is TurnPhase.SCROLLING)
        run_until(session, lambda s: s.phase is TurnPhase.READY)

    session.move(session.hold_queue.active.side.opposite)
    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)

    assert session.final_score == 5
    assert session.best_score == 5


def test_random_play_keeps_invariants(settings):
    """Queue length, timer bounds and score monotonicity hold on every tick."""
    rng = random.Random(3)
    session = GameSession(settings, generator=HoldGenerator(random.Random(11)))
    last_score = 0

    for _ in range(3000):
        if session.phase is TurnPhase.GAME_OVER:
            session.restart()
            last_score = 0
        if session.phase is TurnPhase.READY and rng.random() < 0.1:
            side = session.hold_queue.active.side
            if rng.random() < 0.1:
                side = side.opposite
            session.move(side)
        session.advance(rng.choice([-5.0, 0.0, 8.0, 16.0, 33.0, 250.0]))

        assert len(session.hold_queue) == session.queue_length
        assert 0.0 <= session.timer.display <= settings.max_time_ms
        assert session.score >= last_score
        assert session.score - last_score <= 1
        last_score = session.score


def test_negative_dt_treated_as_zero(session):
    session.advance(-1000)
    assert session.timer.time_left == session.timer.max_time_ms


def test_snapshot_positions(session, settings):
    """y = index * spacing - spacing + offset; lanes at 25% and 75% of width."""
    snap = session.snapshot()

    assert snap.viewport == (360, 640)
    assert snap.time_fraction == 1.0
    assert snap.final_score is None
    assert not snap.game_over

    # Index 0 sits above the viewport and is culled
    ys = [view.y for view in snap.holds]
    assert ys == [0.0, 120.0, 240.0, 360.0, 480.0, 600.0]
    for view in snap.holds:
        centre = 360 * (0.25 if view.side is HoldSide.LEFT else 0.75)
        assert view.x == pytest.approx(centre - view.width / 2)
    assert snap.active_side is session.hold_queue.active.side


def test_snapshot_game_over_fields(session):
    climb_one(session)
    session.move(HoldSide.RIGHT if session.hold_queue.active.side is HoldSide.LEFT else HoldSide.LEFT)
    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)

    snap = session.snapshot()
    assert snap.game_over
    assert snap.final_score == 1
    assert snap.accepting_input is False


def test_signals_published(session, bus):
    received = []
    bus.subscribe_all(lambda event: received.append(event.type))

    session.move(HoldSide.LEFT)
    run_until(session, lambda s: s.phase is TurnPhase.READY)
    session.toggle_day_night()
    session.move(HoldSide.RIGHT)
    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)
    session.restart()

    for event_type in (
        EventType.SCORE_CHANGED,
        EventType.TURN_RESOLVED,
        EventType.PHASE_CHANGED,
        EventType.HOLDS_ADVANCED,
        EventType.DAY_NIGHT_TOGGLED,
        EventType.GAME_OVER,
        EventType.GAME_RESTARTED,
    ):
        assert event_type in received


def test_game_over_payload(session, bus):
    payloads = []
    bus.subscribe(EventType.GAME_OVER, lambda event: payloads.append(event.data))

    climb_one(session)
    session.move(session.hold_queue.active.side.opposite)
    run_until(session, lambda s: s.phase is TurnPhase.GAME_OVER)

    assert payloads == [{"final_score": 1, "best_score": 1}]


def test_frame_animator_drives_turns(settings, generator):
    """With sprite frames the climb takes two rows before the scroll starts."""
    animator = FrameAnimator(frame_rate=10, frames_per_row=4)
    session = GameSession(settings, generator=generator, animator=animator)

    session.move(HoldSide.LEFT)
    assert session.snapshot().pose == FramePose(row=1, frame=0, flip=False)

    session.advance(700)
    assert session.phase is TurnPhase.RESOLVING
    session.advance(100)
    assert session.phase is TurnPhase.SCROLLING
    session.advance(400)
    assert session.phase is TurnPhase.READY

    session.advance(settings.max_time_ms)
    assert session.phase is TurnPhase.RESOLVING
    assert session.snapshot().pose == FramePose(row=3, frame=0, flip=False)
    session.advance(800)
    assert session.phase is TurnPhase.GAME_OVER
