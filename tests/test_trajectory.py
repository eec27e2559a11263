import math

import pytest

from py_gnuballistics import (Calculator, DragDomainError, DragFunction, DragModel, ProjectileState, RangeError,
                              SampleBuffer, TerminationReason, TrajectorySample, Wind)
from py_gnuballistics.engines import TrapezoidIntegrationEngine
from tests.fixtures_and_helpers import create_reference_shot, print_out_solution_compact

pytestmark = pytest.mark.engine


def _sample(range_yd: float = 0.0) -> TrajectorySample:
    return TrajectorySample(range_yd, 0.0, 0.0, 0.0, 0.0, 0.0, 2650.0, 2650.0, 0.0)


class TestSampleBuffer:

    def test_append_and_read(self):
        buffer = SampleBuffer(3)
        buffer.append(_sample(0))
        buffer.append(_sample(1))
        assert buffer.count == len(buffer) == 2
        assert buffer.capacity == 3
        assert not buffer.is_full
        assert [s.range_yd for s in buffer.samples()] == [0, 1]

    def test_full_buffer_rejects(self):
        buffer = SampleBuffer(1)
        buffer.append(_sample())
        assert buffer.is_full
        with pytest.raises(OverflowError):
            buffer.append(_sample(1))
        assert buffer.count == 1

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            SampleBuffer(0)


@pytest.mark.extended
class TestReferenceTrajectory:
    """2650 fps G1 0.465 zeroed at 200 yd on a 29.59 InHg day."""

    @pytest.fixture(scope="class")
    def solution(self):
        return Calculator().fire(create_reference_shot())

    def test_summary(self, solution):
        print_out_solution_compact(solution, "reference")
        assert solution.termination is TerminationReason.STEEP_ANGLE
        assert solution.error is None
        assert solution.corrected_bc == pytest.approx(0.46431866, rel=1e-7)
        assert solution.sight_to_bore_angle_deg == pytest.approx(0.10018921, abs=1e-5)
        assert 5700 < solution.count < 5850
        assert len(solution) == solution.count

    def test_muzzle(self, solution):
        muzzle = solution[0]
        assert muzzle.range_yd == 0
        assert muzzle.time == 0
        assert muzzle.path_in == pytest.approx(-1.6)
        assert muzzle.velocity_fps == pytest.approx(2650)
        assert muzzle.elevation_moa == 0
        assert muzzle.windage_in == 0
        assert muzzle.windage_moa == 0

    @pytest.mark.parametrize(
        "yards, path_in, tolerance",
        [
            (100, 2.095, 0.02),
            (200, 0.0, 0.1),
            (300, -8.75, 0.05),
        ],
    )
    def test_path(self, solution, yards, path_in, tolerance):
        assert solution.at_range(yards).path_in == pytest.approx(path_in, abs=tolerance)

    def test_at_zero_range(self, solution):
        row = solution.at_range(200)
        assert row.range_yd == pytest.approx(200.154, abs=0.01)
        assert row.time == pytest.approx(0.24432, abs=1e-3)
        assert row.velocity_fps == pytest.approx(2279.93, abs=0.5)
        assert row.velocity_fps == pytest.approx(math.hypot(row.vx_fps, row.vy_fps))

    def test_elevation_correction_matches_path(self, solution):
        row = solution.at_range(300)
        assert row.elevation_moa > 0
        expected = -math.degrees(math.atan2(row.path_in / 12, row.range_yd * 3)) * 60
        assert row.elevation_moa == pytest.approx(expected)

    def test_ranges_are_index_addressed(self, solution):
        for index, row in enumerate(solution):
            assert index <= row.range_yd < index + 1
        assert all(a.range_yd < b.range_yd for a, b in zip(solution.samples, solution.samples[1:]))

    def test_speed_and_time(self, solution):
        assert all(a.time < b.time for a, b in zip(solution.samples[1:], solution.samples[2:]))
        assert solution[1000].velocity_fps < solution[500].velocity_fps < solution[100].velocity_fps

    def test_every(self, solution):
        rows = solution.every(100)
        assert rows[0] is solution[0]
        assert rows[2] is solution.at_range(200)
        assert len(rows) == math.ceil(solution.count / 100)
        with pytest.raises(ValueError):
            solution.every(0)

    def test_at_range_past_end(self, solution):
        assert solution.max_range_yd == solution[-1].range_yd
        with pytest.raises(IndexError):
            solution.at_range(solution.count)
        with pytest.raises(IndexError):
            solution.at_range(-1)


def test_deterministic(calc):
    first = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1))
    second = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1))
    assert first.samples == second.samples


def test_capacity_is_normal_termination(reference_shot):
    calc = Calculator(config={'cMaxSamples': 100})
    solution = calc.fire(reference_shot, raise_range_error=True)
    assert solution.termination is TerminationReason.CAPACITY
    assert solution.error is None
    assert solution.count == 100
    assert solution[-1].range_yd == pytest.approx(99, abs=0.2)


def test_crosswind_drift(calc):
    shot = create_reference_shot(wind=Wind(speed_mph=10, angle_deg=90))
    solution = calc.fire(shot)
    row = solution.at_range(200)
    lag = row.time - row.range_yd * 3 / shot.muzzle_velocity_fps
    assert row.windage_in == pytest.approx(10 * 17.6 * lag)
    assert row.windage_in == pytest.approx(3.12, abs=0.02)
    assert row.windage_moa == pytest.approx(math.degrees(math.atan2(row.windage_in, row.range_yd * 36)) * 60)


def test_wind_from_left_drifts_right(calc):
    solution = calc.fire(create_reference_shot(wind=Wind(speed_mph=10, angle_deg=270)))
    assert solution.at_range(300).windage_in < 0


def test_crosswind_does_not_change_path(calc):
    calm = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1))
    breezy = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1, wind=Wind(speed_mph=10, angle_deg=90)))
    assert breezy.at_range(500).path_in == pytest.approx(calm.at_range(500).path_in, abs=1e-6)


def test_headwind_increases_drop(calc):
    calm = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1))
    windy = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1, wind=Wind(speed_mph=20, angle_deg=0)))
    assert windy.at_range(500).path_in < calm.at_range(500).path_in


def test_uphill_shot_hits_high(calc):
    level = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1))
    uphill = calc.fire(create_reference_shot(sight_to_bore_angle_deg=0.1, shooting_angle_deg=30))
    assert uphill.at_range(500).path_in > level.at_range(500).path_in


def test_muzzle_speed_out_of_drag_domain(calc):
    shot = create_reference_shot(muzzle_velocity_fps=9990, sight_to_bore_angle_deg=0.0,
                                 wind=Wind(speed_mph=10, angle_deg=0))
    solution = calc.fire(shot)
    assert solution.termination is TerminationReason.DRAG_DOMAIN
    assert solution.count == 0
    assert isinstance(solution.error, RangeError)
    assert solution.error.last_range_yd is None
    assert isinstance(solution.error.__cause__, DragDomainError)
    with pytest.raises(RangeError):
        calc.fire(shot, raise_range_error=True)


class _ExpiringDragModel(DragModel):
    """Drag lookups fail after a fixed number of calls."""

    def __init__(self, bc, drag_function, calls):
        super().__init__(bc, drag_function)
        self.calls = calls

    def retardation(self, speed):
        self.calls -= 1
        if self.calls < 0:
            raise DragDomainError(DragDomainError.NO_BREAKPOINT, speed, self.drag_function)
        return super().retardation(speed)


def test_drag_failure_keeps_partial_trajectory():
    engine = TrapezoidIntegrationEngine()
    drag_model = _ExpiringDragModel(0.465, DragFunction.G1, calls=600)
    state = ProjectileState.launch(drag_model, 2650, 1.6, 0.0, 0.1)
    solution = engine.run(state, Wind())
    assert solution.termination is TerminationReason.DRAG_DOMAIN
    # 0.5 ft per step: six steps per yard
    assert 90 < solution.count < 110
    assert solution.error.reason == RangeError.DragDomainFailure
    assert solution.error.incomplete_trajectory == solution.samples
    assert solution.error.last_range_yd == solution[-1].range_yd
    assert solution.error.__cause__.reason == DragDomainError.NO_BREAKPOINT


class TestProjectileState:

    @pytest.mark.parametrize("muzzle_velocity", [0.0, -2650.0])
    def test_launch_rejects_non_positive_muzzle_velocity(self, muzzle_velocity):
        with pytest.raises(ValueError, match="Muzzle velocity must be positive"):
            ProjectileState.launch(DragModel(0.465), muzzle_velocity, 1.6, 0.0, 0.0)

    def test_launch(self):
        dm = DragModel(0.3, DragFunction.G7)
        state = ProjectileState.launch(dm, 3000, 1.5, 0.0, 0.0, gravity=-32.194)
        assert state.x == 0
        assert state.y == pytest.approx(-0.125)
        assert state.vx == pytest.approx(3000)
        assert state.vy == 0
        assert state.gx == pytest.approx(0)
        assert state.gy == pytest.approx(-32.194)
        assert state.speed == pytest.approx(3000)

    def test_launch_resolves_gravity_along_total_elevation(self):
        dm = DragModel(0.3, DragFunction.G7)
        state = ProjectileState.launch(dm, 3000, 1.5, 30.0, 0.0, gravity=-32.194)
        assert state.gx == pytest.approx(-32.194 * 0.5)
        assert state.gy == pytest.approx(-32.194 * math.cos(math.radians(30)))
        # velocity follows the sight-to-bore angle only
        assert state.vy == 0

    def test_step_advances_half_a_foot(self):
        engine = TrapezoidIntegrationEngine()
        state = ProjectileState.launch(DragModel(0.465), 2650, 1.6, 0.0, 0.0)
        buffer = SampleBuffer(10)
        keep_going, dt = engine.step(state, buffer, 0.0, 0.0, 0.0)
        assert keep_going
        assert buffer.count == 1
        assert dt == pytest.approx(0.5 / 2650)
        keep_going, _ = engine.step(state, buffer, dt, 0.0, 0.0)
        assert keep_going
        assert state.x == pytest.approx(0.5, rel=1e-3)
        assert state.vx < 2650
        assert state.vy < 0
        assert buffer.count == 1
