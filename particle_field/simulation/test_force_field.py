import numpy as np
import pytest

from particle_field.config import ForceConfig, TimingConfig
from particle_field.detection import GestureResult, Mode
from particle_field.simulation import ExplosionState, ForceField, MotionSignal, RecoveryState, SimulationState
from particle_field.utils import Coords

WIDTH = 640


@pytest.fixture
def field():
    return ForceField(WIDTH, np.random.default_rng(7))


def test_repel_pushes_away_with_capped_strength(field):
    hand = Coords(300, 200)
    positions = np.array([[310.0, 200.0], [300.0, 300.0], [300.5, 200.0], [700.0, 200.0]])

    force = field.repel(positions, hand)

    # 10 px to the right: 8 / (1 + 100 * 0.0005) > 5, so capped
    assert force[0] == pytest.approx([5.0, 0.0])
    # 100 px below: 8 / (1 + 10000 * 0.0005) = 8 / 6
    assert force[1] == pytest.approx([0.0, 8.0 / 6.0])
    # Too close and too far are left alone
    assert force[2] == pytest.approx([0.0, 0.0])
    assert force[3] == pytest.approx([0.0, 0.0])


def test_attract_pulls_toward_hand(field):
    hand = Coords(300, 200)
    positions = np.array([[400.0, 200.0], [300.0, 210.0]])

    force = field.attract(positions, hand)

    # 100 px: 2.5 / (1 + 2) toward the hand (negative x)
    assert force[0] == pytest.approx([-2.5 / 3.0, 0.0])
    # 10 px: 2.5 / 1.2 > 1.5, so capped
    assert force[1] == pytest.approx([0.0, -1.5])


def test_explosion_fades_with_time(field):
    positions = np.array([[420.0, 240.0]])
    explosion = ExplosionState(Coords(320, 240), TimingConfig.EXPLOSION_DURATION)

    fresh = field.explosion(positions, explosion)
    assert fresh[0] == pytest.approx([5.0 / 2.0, 0.0])

    explosion.ticks_remaining = TimingConfig.EXPLOSION_DURATION // 2
    half = field.explosion(positions, explosion)
    assert half[0] == pytest.approx([2.5 / 2.0, 0.0])

    explosion.ticks_remaining = 0
    assert field.explosion(positions, explosion)[0] == pytest.approx([0.0, 0.0])


def test_explosion_has_no_radius_limit(field):
    positions = np.array([[320.0, 240.0 + 1000.0]])
    explosion = ExplosionState(Coords(320, 240))

    force = field.explosion(positions, explosion)

    assert force[0, 1] == pytest.approx(5.0 / 11.0)


def test_recovery_fades_to_zero(field):
    assert np.all(np.abs(field.recovery(50, RecoveryState(120))) <= ForceConfig.RECOVERY_JITTER)
    assert np.all(field.recovery(50, RecoveryState(0)) == 0)


def test_finished_recovery_adds_nothing():
    """With the timer at zero the only random contribution is the ambient jitter."""
    positions = np.random.default_rng(0).uniform(0, 480, size=(20, 2))
    state = SimulationState(recovery=RecoveryState(0))

    accel = ForceField(WIDTH, np.random.default_rng(3)).accelerations(positions, state)
    jitter = ForceField(WIDTH, np.random.default_rng(3)).jitter(20)

    assert accel == pytest.approx(jitter)


def test_motion_coupling_applies_to_every_particle(field):
    coupling = field.motion_coupling(3, MotionSignal(50, -1.0, 0.5))
    assert coupling == pytest.approx(np.tile([-0.7, 0.35], (3, 1)))


def test_repel_uses_mirrored_fingertip():
    """The fingertip at x=100 is displayed at x=540, so a particle at 560 is pushed right."""
    field = ForceField(WIDTH, np.random.default_rng(0))
    state = SimulationState(gesture=GestureResult(Mode.REPEL, Coords(100, 200), None, 1))
    positions = np.array([[560.0, 200.0]])

    accel = field.accelerations(positions, state)

    assert accel[0, 0] > 4.9


def test_forces_ignore_fingertip_in_none_mode():
    field = ForceField(WIDTH, np.random.default_rng(0))
    state = SimulationState(gesture=GestureResult(Mode.NONE, Coords(100, 200), None, 1))
    positions = np.array([[560.0, 200.0]])

    accel = field.accelerations(positions, state)

    assert np.all(np.abs(accel) <= ForceConfig.AMBIENT_JITTER)


def test_damping_then_clamp():
    velocities = np.array([[100.0, -100.0], [1.0, -2.0]])

    ForceField.damp(velocities)

    assert velocities[0] == pytest.approx([ForceConfig.MAX_VELOCITY, -ForceConfig.MAX_VELOCITY])
    assert velocities[1] == pytest.approx([0.95, -1.9])


def test_apply_keeps_velocities_bounded(field):
    positions = np.full((10, 2), 300.0) + np.arange(10)[:, None] * 3
    velocities = np.full((10, 2), 7.9)
    state = SimulationState(
        gesture=GestureResult(Mode.REPEL, Coords(WIDTH - 300, 300), None, 1),
        explosion=ExplosionState(Coords(300, 300)),
    )

    for _ in range(20):
        field.apply(velocities, positions, state)
        assert np.all(np.abs(velocities) <= ForceConfig.MAX_VELOCITY)
