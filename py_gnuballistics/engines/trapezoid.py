"""Trapezoidal integration engine for point-mass trajectories.

Velocity is advanced with a forward Euler step and position with the average
of the old and new velocity (the trapezoidal rule). The time step is scaled
inversely with speed so every step covers roughly the same distance.

Classes:
    TrapezoidIntegrationEngine: Trajectory integrator recording one sample per yard

Examples:
    >>> from py_gnuballistics import Calculator, TrapezoidIntegrationEngine
    >>> calc = Calculator(engine=TrapezoidIntegrationEngine)
"""

import math

from typing_extensions import Optional, Tuple, override

from py_gnuballistics.conditions import Shot, Wind
from py_gnuballistics.constants import cFeetPerYard, cInchesPerFoot
from py_gnuballistics.engines.base_engine import (
    EngineConfigDict,
    BaseIntegrationEngine,
    ProjectileState,
    kinematic_step,
)
from py_gnuballistics.exceptions import DragDomainError, RangeError
from py_gnuballistics.helpers import mph_to_fps, mph_to_ips, rad_to_moa, vacuum_time
from py_gnuballistics.logger import logger
from py_gnuballistics.trajectory_data import SampleBuffer, Solution, TerminationReason, TrajectorySample

__all__ = ('TrapezoidIntegrationEngine',)


class TrapezoidIntegrationEngine(BaseIntegrationEngine):
    """Trapezoidal integration engine for ballistic trajectory calculations.

    Attributes:
        DEFAULT_STEP: Default step size multiplier for integration (0.5 ft per step).
        integration_step_count: Number of integration steps performed.
    """

    DEFAULT_STEP = 0.5

    def __init__(self, config: Optional[EngineConfigDict] = None) -> None:
        super().__init__(config)
        self.integration_step_count: int = 0

    @override
    def get_calc_step(self) -> float:
        """Distance-like step, scaled by speed to produce each time step.

        Returns:
            `cStepMultiplier * DEFAULT_STEP`
        """
        return super().get_calc_step() * self.DEFAULT_STEP

    def step(self, state: ProjectileState, buffer: SampleBuffer, dt: float,
             headwind_mph: float, crosswind_mph: float) -> Tuple[bool, float]:
        """Advance the projectile one step and record a sample on each new yard.

        Args:
            state: Projectile state, updated in place.
            buffer: Samples of the current run.
            dt: Time step in seconds.
            headwind_mph: Headwind component (mph).
            crosswind_mph: Crosswind component (mph).

        Returns:
            (keep_going, next_dt). keep_going is False once the trajectory turns
            too steep or the buffer is full.

        Raises:
            DragDomainError: If drag is undefined at the current air speed.
        """
        _, vx0, vy0 = kinematic_step(state, dt, mph_to_fps(headwind_mph))

        if state.x / cFeetPerYard >= buffer.count:
            buffer.append(self._sample(state, vx0, vy0, crosswind_mph))

        next_dt = self.get_calc_step() / state.speed
        if state.is_steep(self._config.cSteepnessRatio) or buffer.is_full:
            return False, next_dt
        return True, next_dt

    @staticmethod
    def _sample(state: ProjectileState, vx0: float, vy0: float, crosswind_mph: float) -> TrajectorySample:
        vx = (state.vx + vx0) / 2
        vy = (state.vy + vy0) / 2
        windage_in = mph_to_ips(crosswind_mph) * (state.time - vacuum_time(state.x, state.muzzle_velocity))
        if state.x > 0:
            elevation_moa = -rad_to_moa(math.atan2(state.y, state.x))
            windage_moa = rad_to_moa(math.atan2(windage_in, cInchesPerFoot * state.x))
        else:
            # corrections are undefined at the muzzle
            elevation_moa = windage_moa = 0.0
        return TrajectorySample(
            range_yd=state.x / cFeetPerYard,
            path_in=state.y * cInchesPerFoot,
            elevation_moa=elevation_moa,
            time=state.time,
            windage_in=windage_in,
            windage_moa=windage_moa,
            velocity_fps=math.hypot(vx, vy),
            vx_fps=vx,
            vy_fps=vy,
        )

    def run(self, state: ProjectileState, wind: Wind, shot: Optional[Shot] = None) -> Solution:
        """Integrate from ``state`` until the trajectory turns steep or the buffer fills.

        The first step has zero length, so the first sample is the muzzle state.

        Args:
            state: Launch state (see ProjectileState.launch).
            wind: Wind in effect.
            shot: Shot the state was launched from, attached to the Solution.

        Returns:
            Solution. A drag failure aborts the run: the Solution then holds the
            samples recorded so far and a RangeError.
        """
        buffer = SampleBuffer(self._config.cMaxSamples)
        headwind_mph = wind.headwind
        crosswind_mph = wind.crosswind
        error: Optional[RangeError] = None
        dt = 0.0
        integration_step_count = 0
        try:
            keep_going = True
            while keep_going:
                integration_step_count += 1
                keep_going, dt = self.step(state, buffer, dt, headwind_mph, crosswind_mph)
            if buffer.is_full:
                termination = TerminationReason.CAPACITY
                logger.info(f"Sample buffer full at {buffer.capacity} samples")
            else:
                termination = TerminationReason.STEEP_ANGLE
        except DragDomainError as exc:
            termination = TerminationReason.DRAG_DOMAIN
            error = RangeError(RangeError.DragDomainFailure, buffer.samples())
            error.__cause__ = exc
            logger.warning(f"Trajectory aborted after {buffer.count} samples: {exc}")

        logger.debug(f"Trapezoid ran {integration_step_count} iterations")
        self.integration_step_count += integration_step_count
        return Solution(
            shot=shot,
            sight_to_bore_angle_deg=math.degrees(state.sight_to_bore_rad),
            corrected_bc=state.drag_model.BC,
            samples=buffer.samples(),
            termination=termination,
            error=error,
        )

    @override
    def integrate(self, shot: Shot) -> Solution:
        """Create Solution for the specified shot.

        Args:
            shot: Shot to compute. It is zeroed first if it has no sight-to-bore angle yet.

        Returns:
            Solution: Object describing the trajectory.
        """
        angle_deg = shot.sight_to_bore_angle_deg
        if angle_deg is None:
            angle_deg = self.find_zero_angle(shot)
        corrected_bc = shot.atmosphere.correct(shot.drag_model.BC)
        state = self.launch(shot, shot.drag_model.with_bc(corrected_bc), angle_deg)
        return self.run(state, shot.wind, shot=shot)
