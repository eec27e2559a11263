import pytest

from py_gnuballistics import DragFunction
from py_gnuballistics.exceptions import DragDomainError, RangeError, SolverRuntimeError, ZeroFindingError
from py_gnuballistics.trajectory_data import TrajectorySample

pytestmark = pytest.mark.extended


def _ts(range_yd: float = 0.0) -> TrajectorySample:
    """Create a minimal TrajectorySample row for exception tests."""
    return TrajectorySample(
        range_yd=range_yd,
        path_in=0.0,
        elevation_moa=0.0,
        time=0.0,
        windage_in=0.0,
        windage_moa=0.0,
        velocity_fps=1000.0,
        vx_fps=1000.0,
        vy_fps=0.0,
    )


def test_hierarchy():
    for exc_type in (DragDomainError, ZeroFindingError, RangeError):
        assert issubclass(exc_type, SolverRuntimeError)
    assert issubclass(SolverRuntimeError, RuntimeError)


def test_drag_domain_error_message_and_attrs():
    err = DragDomainError(DragDomainError.SPEED_OUT_OF_RANGE, 12000.0, DragFunction.G7)
    assert err.reason == DragDomainError.SPEED_OUT_OF_RANGE
    assert err.speed == 12000.0
    assert err.drag_function is DragFunction.G7
    assert "12000.0 fps" in str(err) and "G7" in str(err)

    bare = DragDomainError(DragDomainError.NO_BREAKPOINT, 5.0)
    assert "drag function" not in str(bare)


def test_zero_finding_error_message_and_attrs():
    zfe = ZeroFindingError(52.5, 7)
    assert "after 7 iterations" in str(zfe)
    assert "52.5000 deg" in str(zfe)
    assert zfe.iterations_count == 7
    assert zfe.last_angle_deg == 52.5
    assert ZeroFindingError.ANGLE_LIMIT_EXCEEDED in str(zfe)

    zfe2 = ZeroFindingError(1.0, 2, reason="")
    assert str(zfe2).startswith("No achievable zero")


def test_range_error_last_range_set_and_none():
    err_empty = RangeError(RangeError.DragDomainFailure, [])
    assert err_empty.last_range_yd is None
    assert RangeError.DragDomainFailure in str(err_empty)

    err_with = RangeError(RangeError.DragDomainFailure, [_ts(0.0), _ts(123.4)])
    assert err_with.last_range_yd == pytest.approx(123.4)
    assert "123.4 yd" in str(err_with)
    assert len(err_with.incomplete_trajectory) == 2
