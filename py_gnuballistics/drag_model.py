"""Drag model for point-mass projectiles.

The retardation of a projectile is the retardation of its standard reference
projectile (one of the G functions) scaled by the projectile's ballistic
coefficient.

Key Components:
    - DragBreakpoint: One row of a piecewise power-law drag table
    - DragModel: Ballistic coefficient paired with a drag function

Functions:
    - make_breakpoints: Convert drag table rows to DragBreakpoint objects
    - drag_retardation: Retardation (ft/s per second) at a given speed
"""

# Standard library imports
from dataclasses import dataclass
from typing import Dict, List, Union

# Third-party imports
from typing_extensions import TypeAlias

# Local imports
from py_gnuballistics.constants import cMaxDragVelocity
from py_gnuballistics.drag_tables import DRAG_TABLES, DragFunction, DragTablePointDictType, get_drag_table
from py_gnuballistics.exceptions import DragDomainError

__all__ = (
    'DragBreakpoint',
    'DragModel',
    'make_breakpoints',
    'drag_retardation',
)


@dataclass(frozen=True)
class DragBreakpoint:
    """Power-law fit ``A * v**M`` valid for speeds above ``velocity``.

    Attributes:
        velocity: Lower bound of the interval (fps, exclusive)
        A: Coefficient
        M: Exponent
    """

    velocity: float
    A: float
    M: float

    def retardation(self, speed: float) -> float:
        return self.A * speed ** self.M


DragTableDataType: TypeAlias = Union[List[DragTablePointDictType], List[DragBreakpoint]]


def make_breakpoints(drag_table: DragTableDataType) -> List[DragBreakpoint]:
    """Convert drag table rows to a list of DragBreakpoints.

    Args:
        drag_table: Either DragBreakpoint objects or dictionaries with
                    'Velocity', 'A' and 'M' keys, sorted descending by velocity

    Returns:
        List of DragBreakpoint objects in the same order

    Raises:
        TypeError: If an item is neither a DragBreakpoint nor a dict with the required keys
    """
    try:
        return [
            point if isinstance(point, DragBreakpoint) else DragBreakpoint(point['Velocity'], point['A'], point['M'])
            for point in drag_table
        ]
    except (KeyError, TypeError) as exc:
        raise TypeError(
            "All items in drag_table must be of type DragBreakpoint or dict with 'Velocity', 'A' and 'M' keys"
        ) from exc


_BREAKPOINTS: Dict[DragFunction, List[DragBreakpoint]] = {
    fn: make_breakpoints(table) for fn, table in DRAG_TABLES.items()
}


def _breakpoints_for(drag_function: DragFunction) -> List[DragBreakpoint]:
    try:
        return _BREAKPOINTS[drag_function]
    except KeyError:
        # delegates the unsupported-family error
        return make_breakpoints(get_drag_table(drag_function))


def drag_retardation(drag_function: DragFunction, bc: float, speed: float) -> float:
    """Retardation of a projectile moving at ``speed`` through standard air.

    The first breakpoint (scanning from the highest) whose lower bound is below
    ``speed`` supplies the fit.

    Args:
        drag_function: Reference projectile family
        bc: Ballistic coefficient, already corrected for the atmosphere
        speed: Speed relative to the air (fps)

    Returns:
        Velocity loss rate in ft/s per second

    Raises:
        DragDomainError: Speed outside (0, 10000) fps, no breakpoint below it,
            or a family without a table
    """
    if speed <= 0 or speed >= cMaxDragVelocity:
        raise DragDomainError(DragDomainError.SPEED_OUT_OF_RANGE, speed, drag_function)
    for point in _breakpoints_for(drag_function):
        if speed > point.velocity:
            return point.retardation(speed) / bc
    raise DragDomainError(DragDomainError.NO_BREAKPOINT, speed, drag_function)


class DragModel:
    """Ballistic coefficient and the standard drag function it refers to.

    Instances are treated as immutable: use ``with_bc`` to get a model with a
    corrected coefficient.

    Attributes:
        BC: Ballistic coefficient
        drag_function: Reference projectile family
        breakpoints: Drag table rows for the family
    """

    def __init__(self, bc: float, drag_function: Union[DragFunction, int] = DragFunction.G1) -> None:
        """
        Raises:
            ValueError: If BC is not positive or the drag function has no table
        """
        if bc <= 0:
            raise ValueError('Ballistic coefficient must be positive')
        try:
            drag_function = DragFunction(drag_function)
        except ValueError as exc:
            raise ValueError(f'Unknown drag function {drag_function!r}') from exc
        if drag_function not in DRAG_TABLES:
            raise ValueError(f'Drag function {drag_function.name} is not supported')

        self.BC = bc
        self.drag_function = drag_function
        self.breakpoints = _BREAKPOINTS[drag_function]

    def __repr__(self) -> str:
        return f"DragModel(BC={self.BC}, drag_function={self.drag_function.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DragModel):
            return NotImplemented
        return self.BC == other.BC and self.drag_function == other.drag_function

    def __hash__(self) -> int:
        return hash((self.BC, self.drag_function))

    def retardation(self, speed: float) -> float:
        """Velocity loss rate (ft/s per second) at ``speed`` fps."""
        return drag_retardation(self.drag_function, self.BC, speed)

    def with_bc(self, bc: float) -> 'DragModel':
        return DragModel(bc, self.drag_function)
