"""py_gnuballistics exception types.

Exception Hierarchy
-------------------

Exception (built-in Python)
└── RuntimeError
    └── SolverRuntimeError
        ├── DragDomainError
        ├── ZeroFindingError
        └── RangeError

Invalid configuration (non-positive ballistic coefficient or muzzle velocity,
a drag function without a table) is rejected with a plain ValueError before
any simulation step runs.

Exception Types
---------------

- SolverRuntimeError: Base class for all solver errors. Not raised directly.

- DragDomainError: Raised when a drag retardation lookup is outside the tabulated domain. Contains:
  - reason: SPEED_OUT_OF_RANGE, NO_BREAKPOINT or UNSUPPORTED_DRAG_FUNCTION
  - speed: The speed (fps) that was looked up, None when no lookup was made
  - drag_function: The drag function that was queried

- ZeroFindingError: Raised when the sight-to-bore angle search cannot reach the requested zero. Contains:
  - reason: ANGLE_LIMIT_EXCEEDED
  - last_angle_deg: Last launch angle tried, in degrees
  - iterations_count: Number of candidate trajectories simulated

- RangeError: Attached to a Solution whose run was aborted by a failed step. Contains:
  - reason: DragDomainFailure
  - incomplete_trajectory: Samples recorded before the failure
  - last_range_yd: Range of the last recorded sample, or None
"""
from __future__ import annotations

from typing import Any, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from py_gnuballistics.trajectory_data import TrajectorySample

__all__ = (
    'SolverRuntimeError',
    'DragDomainError',
    'ZeroFindingError',
    'RangeError',
)


class SolverRuntimeError(RuntimeError):
    """Solver error."""


class DragDomainError(SolverRuntimeError):
    """Drag retardation requested outside of the drag table's domain."""

    SPEED_OUT_OF_RANGE = "Speed out of range"
    NO_BREAKPOINT = "No breakpoint below speed"
    UNSUPPORTED_DRAG_FUNCTION = "Unsupported drag function"

    def __init__(self, reason: str, speed: Optional[float] = None, drag_function: Any = None):
        self.reason: str = reason
        self.speed: Optional[float] = speed
        self.drag_function = drag_function
        msg = reason if speed is None else f"{reason}: speed {speed} fps"
        if drag_function is not None:
            msg += f' for drag function {getattr(drag_function, "name", drag_function)}'
        super().__init__(msg)


class ZeroFindingError(SolverRuntimeError):
    """Exception for zero-finding issues.

    Contains:
    - Last launch angle tried (degrees)
    - Iteration count
    """

    ANGLE_LIMIT_EXCEEDED = "Launch angle limit exceeded"

    def __init__(self,
                 last_angle_deg: float,
                 iterations_count: int,
                 reason: str = ANGLE_LIMIT_EXCEEDED):
        self.last_angle_deg: float = last_angle_deg
        self.iterations_count: int = iterations_count
        self.reason: str = reason
        msg = (f'No achievable zero: last angle {last_angle_deg:.4f} deg '
               f'after {iterations_count} iterations.')
        if reason:
            msg = f"{reason}. " + msg
        super().__init__(msg)


class RangeError(SolverRuntimeError):
    """Exception for trajectories aborted before a normal termination.

    Contains:
    - The error reason
    - The samples recorded before the exception occurred
    - Range of the last recorded sample
    """

    reason: str
    incomplete_trajectory: Sequence[TrajectorySample]
    last_range_yd: Optional[float]

    DragDomainFailure: str = "Drag lookup failed"

    def __init__(self, reason: str, samples: Sequence[TrajectorySample]):
        self.reason = reason
        self.incomplete_trajectory = samples

        message = f'Trajectory aborted: ({self.reason})'
        if len(samples) > 0:
            self.last_range_yd = samples[-1].range_yd
            message += f', last range: {self.last_range_yd:.1f} yd'
        else:
            self.last_range_yd = None
        super().__init__(message)
