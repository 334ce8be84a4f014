"""
Tests for mode edge detection and the explosion / recovery timers.
"""

from particle_field.config import TimingConfig
from particle_field.detection import GestureResult, Mode
from particle_field.simulation import ModeEdgeDetector, SimulationState, TransitionController
from particle_field.utils import Coords

MIDPOINT = Coords(320, 240)

EXPLOSION = GestureResult(Mode.EXPLOSION, Coords(100, 100), MIDPOINT, 2)
REPEL = GestureResult(Mode.REPEL, Coords(100, 100), None, 1)
NONE = GestureResult(Mode.NONE)


def run_frame(controller, state, gesture):
    fired = controller.begin_frame(state, gesture)
    controller.end_frame(state)
    return fired


def test_edge_detector_reports_transitions():
    edges = ModeEdgeDetector()

    first = edges.push(Mode.REPEL)
    assert first.entered(Mode.REPEL)
    assert first.changed

    second = edges.push(Mode.REPEL)
    assert not second.changed
    assert not second.entered(Mode.REPEL)

    third = edges.push(Mode.NONE)
    assert third.left(Mode.REPEL)
    assert third.gesture_ended


def test_explosion_fires_once_per_two_hand_interval():
    controller = TransitionController()
    state = SimulationState()

    fired = [run_frame(controller, state, EXPLOSION) for _ in range(30)]

    assert fired.count(True) == 1
    assert fired[0]


def test_explosion_rearms_after_hands_separate():
    controller = TransitionController()
    state = SimulationState()

    assert run_frame(controller, state, EXPLOSION)
    assert not run_frame(controller, state, EXPLOSION)
    assert not run_frame(controller, state, NONE)
    assert run_frame(controller, state, EXPLOSION)


def test_explosion_timer_runs_out():
    controller = TransitionController()
    state = SimulationState()

    controller.begin_frame(state, EXPLOSION)
    assert state.explosion.midpoint == MIDPOINT
    assert state.explosion.ticks_remaining == TimingConfig.EXPLOSION_DURATION
    assert state.explosion.time_factor == 1

    controller.end_frame(state)
    for _ in range(TimingConfig.EXPLOSION_DURATION - 2):
        run_frame(controller, state, EXPLOSION)
    assert state.explosion.ticks_remaining == 1

    run_frame(controller, state, EXPLOSION)
    assert state.explosion is None


def test_recovery_armed_when_gesture_ends():
    controller = TransitionController()
    state = SimulationState()

    run_frame(controller, state, REPEL)
    assert not state.recovery.active

    controller.begin_frame(state, NONE)
    assert state.recovery.ticks_remaining == TimingConfig.RECOVERY_DURATION
    assert state.recovery.factor == 1
    controller.end_frame(state)

    for _ in range(TimingConfig.RECOVERY_DURATION - 1):
        run_frame(controller, state, NONE)

    assert state.recovery.ticks_remaining == 0
    assert state.recovery.factor == 0


def test_recovery_not_armed_while_idle():
    controller = TransitionController()
    state = SimulationState()

    for _ in range(5):
        run_frame(controller, state, NONE)

    assert state.recovery.ticks_remaining == 0


def test_explosion_without_midpoint_does_not_fire():
    controller = TransitionController()
    state = SimulationState()

    assert not controller.begin_frame(state, GestureResult(Mode.EXPLOSION))
    assert state.explosion is None
