"""Trajectory data structures.

Core Components:
    - TrajectorySample: Ballistic state recorded once per yard of travel
    - SampleBuffer: Capacity-bounded, index-addressed sample storage owned by a run
    - TerminationReason: Why an integration run stopped
    - Solution: Complete trajectory results with metadata

Typical Usage:
    ```python
    from py_gnuballistics import Calculator, DragModel, DragFunction, Shot

    calc = Calculator()
    shot = Shot(drag_model=DragModel(0.465, DragFunction.G1), muzzle_velocity_fps=2650,
                sight_height_in=1.6, zero_range_yd=200)
    solution = calc.fire(shot)

    for row in solution.every(100):
        print(f"{row.range_yd:.0f} yd: {row.path_in:.2f} in, {row.elevation_moa:.2f} MOA")
    ```
"""
from __future__ import annotations

import typing
from dataclasses import dataclass, field
from enum import Enum

from typing_extensions import Iterator, List, NamedTuple, Optional, Tuple

from py_gnuballistics.exceptions import RangeError

if typing.TYPE_CHECKING:
    from py_gnuballistics.conditions import Shot

__all__ = (
    'TrajectorySample',
    'SampleBuffer',
    'TerminationReason',
    'Solution',
)


class TrajectorySample(NamedTuple):
    """Ballistic state at one yard of downrange travel.

    Attributes:
        range_yd: Downrange distance (yd).
        path_in: Height relative to the line of sight (in). Negative is below.
        elevation_moa: Correction to bring the line of sight onto the trajectory (MOA).
        time: Time of flight (s).
        windage_in: Wind drift (in). Positive is towards the left.
        windage_moa: Correction for wind drift (MOA).
        velocity_fps: Total speed (fps).
        vx_fps: Downrange velocity component (fps).
        vy_fps: Vertical velocity component (fps).
    """

    range_yd: float
    path_in: float
    elevation_moa: float
    time: float
    windage_in: float
    windage_moa: float
    velocity_fps: float
    vx_fps: float
    vy_fps: float


class SampleBuffer:
    """Append-only sample storage with a fixed maximum capacity.

    Slots are allocated at construction and never grow. The integrator checks
    ``is_full`` before appending; appending to a full buffer is a programming error.
    """

    __slots__ = ('_slots', '_count')

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("Sample buffer capacity must be positive")
        self._slots: List[Optional[TrajectorySample]] = [None] * capacity
        self._count: int = 0

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_full(self) -> bool:
        return self._count >= len(self._slots)

    def append(self, sample: TrajectorySample) -> None:
        """Store ``sample`` in the next free slot.

        Raises:
            OverflowError: If the buffer is full.
        """
        if self.is_full:
            raise OverflowError(f"Sample buffer is full ({self.capacity} samples)")
        self._slots[self._count] = sample
        self._count += 1

    def samples(self) -> Tuple[TrajectorySample, ...]:
        """Valid samples in recording order."""
        return tuple(self._slots[:self._count])  # type: ignore[arg-type]


class TerminationReason(Enum):
    """Why an integration run stopped."""

    STEEP_ANGLE = "Trajectory too steep"
    CAPACITY = "Sample buffer full"
    DRAG_DOMAIN = "Drag lookup failed"


@dataclass(frozen=True)
class Solution:
    """Computed trajectory of a shot.

    Samples are index-addressed by yard: ``solution[100]`` is the first sample
    recorded at or beyond 100 yards.

    Attributes:
        shot: The parameters of the shot calculation.
        sight_to_bore_angle_deg: Launch angle used (degrees).
        corrected_bc: Ballistic coefficient after atmospheric correction.
        samples: Recorded TrajectorySamples.
        termination: Why the run stopped.
        error: RangeError, if the run was aborted by a failed step.
    """

    shot: Optional[Shot]
    sight_to_bore_angle_deg: float
    corrected_bc: float
    samples: Tuple[TrajectorySample, ...] = field(repr=False)
    termination: TerminationReason
    error: Optional[RangeError] = None

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[TrajectorySample]:
        yield from self.samples

    def __getitem__(self, item):
        return self.samples[item]

    @property
    def count(self) -> int:
        return len(self.samples)

    @property
    def max_range_yd(self) -> float:
        """Range of the last recorded sample, 0 if none were recorded."""
        return self.samples[-1].range_yd if self.samples else 0.0

    def at_range(self, yards: int) -> TrajectorySample:
        """Sample recorded for the given whole yard.

        Raises:
            IndexError: If the trajectory did not reach ``yards``.
        """
        index = int(yards)
        if index < 0 or index >= len(self.samples):
            raise IndexError(
                f"Calculated trajectory doesn't reach requested range {yards} yd "
                f"(max {self.max_range_yd:.1f} yd)"
            )
        return self.samples[index]

    def every(self, step_yd: int) -> Tuple[TrajectorySample, ...]:
        """Rows at every ``step_yd`` yards starting at the muzzle, as for a range card."""
        if step_yd <= 0:
            raise ValueError("Step must be a positive number of yards")
        return self.samples[::int(step_yd)]
