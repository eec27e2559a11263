import pytest

from py_gnuballistics import drag_tables as _drag_tables_mod
from py_gnuballistics.drag_model import make_breakpoints
from py_gnuballistics.drag_tables import DRAG_TABLES, DragFunction, get_drag_table, get_drag_tables_names
from py_gnuballistics.exceptions import DragDomainError


def _discover_drag_tables():
    """Yield (name, table) for every drag table defined in drag_tables."""
    discovered = []
    for attr_name, value in vars(_drag_tables_mod).items():
        if not isinstance(value, list) or not value:
            continue
        first = value[0]
        if isinstance(first, dict) and {'Velocity', 'A', 'M'} <= set(first):
            discovered.append((attr_name, value))
    discovered.sort(key=lambda x: x[0])
    return discovered


def test_discovery_matches_api_names():
    names = {name for name, _ in _discover_drag_tables()}
    assert names == set(get_drag_tables_names())
    assert names == {'TableG1', 'TableG2', 'TableG5', 'TableG6', 'TableG7', 'TableG8'}


@pytest.mark.parametrize("name, table", _discover_drag_tables())
def test_table_sorted_descending_down_to_zero(name, table):
    velocities = [row['Velocity'] for row in table]
    assert all(a > b for a, b in zip(velocities, velocities[1:])), f"{name} is not strictly descending"
    assert velocities[-1] == 0


@pytest.mark.parametrize("name, table", _discover_drag_tables())
def test_table_coefficients_positive(name, table):
    for point in make_breakpoints(table):
        assert point.A > 0
        assert point.M > 0


@pytest.mark.parametrize("drag_function", [DragFunction.G3, DragFunction.G4])
def test_missing_tables_raise(drag_function):
    with pytest.raises(DragDomainError) as ei:
        get_drag_table(drag_function)
    assert ei.value.reason == DragDomainError.UNSUPPORTED_DRAG_FUNCTION
    assert drag_function not in DRAG_TABLES
    assert ei.value.speed is None
    assert "speed" not in str(ei.value)
    assert drag_function.name in str(ei.value)


def test_table_lookup_by_int():
    assert get_drag_table(7) is _drag_tables_mod.TableG7
    assert len(get_drag_table(DragFunction.G1)) == 41


def _breakpoint_jumps(table):
    """Relative jump in retardation across each interior breakpoint."""
    points = make_breakpoints(table)
    for upper, lower in zip(points, points[1:]):
        v = upper.velocity
        if v <= 0:
            continue
        below = lower.retardation(v)
        above = upper.retardation(v)
        yield v, abs(above - below) / below


def test_g1_continuity_at_breakpoints():
    for v, jump in _breakpoint_jumps(_drag_tables_mod.TableG1):
        assert jump < 0.025, f"G1 jumps {jump:.3%} at {v} fps"


@pytest.mark.parametrize("name, table", _discover_drag_tables())
def test_breakpoints_roughly_continuous(name, table):
    # Transonic fits of the lower-order tables are coarse
    for v, jump in _breakpoint_jumps(table):
        assert jump < 0.6, f"{name} jumps {jump:.3%} at {v} fps"
