"""Base integration engine for point-mass trajectory calculations.

The module serves as the core framework for the engine system, providing:
- Engine configuration management through EngineConfig and EngineConfigDict
- ProjectileState, the kinematic state shared by the zero solver and integrators
- kinematic_step, the single integration step both of them use
- Abstract base class BaseIntegrationEngine implementing the zero-angle search

Configuration Constants:
    cZeroInitialStepDeg: First angular step of the zero search (degrees)
    cZeroAccuracyMOA: Zero search stops when its step is below this (MOA)
    cZeroMaxAngleDeg: Largest launch angle the zero search will try (degrees)
    cSteepnessRatio: Runs stop once |vy| exceeds this multiple of |vx|

Architecture:
    BaseIntegrationEngine owns the configuration and the zero search, while
    concrete subclasses implement trajectory integration. Both drive the same
    `kinematic_step`, so a zero found by the search is consistent with the
    trajectory the integrator produces.

See Also:
    py_gnuballistics.engines.trapezoid: Trajectory integrator
    py_gnuballistics.interface.Calculator: Facade over an engine
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict

from typing_extensions import Any, Dict, Optional, Tuple, TypedDict

from py_gnuballistics.conditions import Shot
from py_gnuballistics.constants import cGravityConstant, cInchesPerFoot, cFeetPerYard, cMaxSamples
from py_gnuballistics.drag_model import DragModel
from py_gnuballistics.exceptions import ZeroFindingError
from py_gnuballistics.helpers import mph_to_fps, moa_to_rad
from py_gnuballistics.logger import logger
from py_gnuballistics.trajectory_data import Solution

__all__ = (
    'create_engine_config',
    'set_engine_config_defaults',
    'reset_engine_config_defaults',
    'EngineConfig',
    'EngineConfigDict',
    'DEFAULT_ENGINE_CONFIG',
    'ProjectileState',
    'kinematic_step',
    'BaseIntegrationEngine',
)

cStepMultiplier: float = 1.0  # Multiplier for engine's default step, for changing integration speed & precision
cZeroInitialStepDeg: float = 14.0
cZeroAccuracyMOA: float = 0.01
cZeroMaxAngleDeg: float = 45.0
cSteepnessRatio: float = 3.0


@dataclass
class EngineConfig:
    """Configuration dataclass for ballistic calculation engines.

    All parameters use imperial units (feet, fps) for internal calculations.

    Attributes:
        cGravityConstant: Gravitational acceleration in ft/s².
                         Defaults to -32.194 ft/s², the value the drag fits assume.
        cStepMultiplier: Multiplier for the engines' default integration step size.
                        Values < 1.0 increase precision but slow calculation.
                        Defaults to 1.0.
        cMaxSamples: Capacity of the sample buffer, one sample per yard.
                    Defaults to 50000.
        cZeroInitialStepDeg: First angular step of the zero search. Defaults to 14°.
        cZeroAccuracyMOA: The zero search converges when its step is smaller than this.
                         Defaults to 0.01 MOA.
        cZeroMaxAngleDeg: A zero requiring more launch angle than this is unreachable.
                         Defaults to 45°.
        cSteepnessRatio: Simulations stop when |vy| > cSteepnessRatio * |vx|.
                        Defaults to 3.

    Examples:
        >>> config = EngineConfig(cStepMultiplier=0.5)  # Higher precision
    """

    cGravityConstant: float = cGravityConstant
    cStepMultiplier: float = cStepMultiplier
    cMaxSamples: int = cMaxSamples
    cZeroInitialStepDeg: float = cZeroInitialStepDeg
    cZeroAccuracyMOA: float = cZeroAccuracyMOA
    cZeroMaxAngleDeg: float = cZeroMaxAngleDeg
    cSteepnessRatio: float = cSteepnessRatio


#: Default configuration instance using standard ballistic calculation parameters
DEFAULT_ENGINE_CONFIG: EngineConfig = EngineConfig()

# Overrides loaded by basicConfig(), applied to every config created afterwards
_config_defaults: Dict[str, Any] = {}


class EngineConfigDict(TypedDict, total=False):
    """TypedDict for engine configuration from dictionaries.

    All fields are optional. When used with create_engine_config(), any
    unspecified fields use the defaults (DEFAULT_ENGINE_CONFIG updated by
    `basicConfig()` overrides).

    Examples:
        >>> config_dict: EngineConfigDict = {'cStepMultiplier': 0.5}
        >>> config = create_engine_config(config_dict)
        >>> from py_gnuballistics import Calculator
        >>> calc = Calculator(config=config_dict)
    """

    cGravityConstant: Optional[float]
    cStepMultiplier: Optional[float]
    cMaxSamples: Optional[int]
    cZeroInitialStepDeg: Optional[float]
    cZeroAccuracyMOA: Optional[float]
    cZeroMaxAngleDeg: Optional[float]
    cSteepnessRatio: Optional[float]


def set_engine_config_defaults(overrides: EngineConfigDict) -> None:
    """Replace the default overrides used by create_engine_config().

    Raises:
        TypeError: If an override names an unknown field.
    """
    unknown = set(overrides) - set(asdict(DEFAULT_ENGINE_CONFIG))
    if unknown:
        raise TypeError(f"Unknown engine config fields: {', '.join(sorted(unknown))}")
    _config_defaults.clear()
    _config_defaults.update(overrides)


def reset_engine_config_defaults() -> None:
    _config_defaults.clear()


def create_engine_config(interface_config: Optional[EngineConfigDict] = None) -> EngineConfig:
    """Create EngineConfig from optional dictionary configuration.

    Args:
        interface_config: Optional dictionary containing configuration overrides.
                         Only specified fields override the defaults.

    Returns:
        EngineConfig instance with merged configuration values.

    Raises:
        TypeError: If interface_config names an unknown field.

    Examples:
        >>> config = create_engine_config()
        >>> custom_config = create_engine_config({'cZeroMaxAngleDeg': 30.0})
    """
    config = asdict(DEFAULT_ENGINE_CONFIG)
    config.update(_config_defaults)
    if interface_config is not None and isinstance(interface_config, dict):
        config.update(interface_config)
    return EngineConfig(**config)


@dataclass
class ProjectileState:
    """Kinematic state of the projectile in the sight-line frame.

    x is downrange and y is height relative to the line of sight, both in feet.
    Gravity is resolved into components along these axes.
    """

    drag_model: DragModel
    muzzle_velocity: float
    sight_to_bore_rad: float
    gx: float
    gy: float
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    time: float = 0.0

    @classmethod
    def launch(cls, drag_model: DragModel, muzzle_velocity: float, sight_height_in: float,
               shooting_angle_deg: float, sight_to_bore_deg: float,
               gravity: float = cGravityConstant) -> ProjectileState:
        """State at the muzzle.

        Gravity is resolved along the total elevation (shooting angle plus
        sight-to-bore angle) while the launch velocity follows the
        sight-to-bore angle, as the sight line is the frame of reference.

        Raises:
            ValueError: If muzzle_velocity is not positive.
        """
        if muzzle_velocity <= 0:
            raise ValueError("Muzzle velocity must be positive")
        bore_rad = math.radians(sight_to_bore_deg)
        elevation_rad = math.radians(shooting_angle_deg + sight_to_bore_deg)
        return cls(
            drag_model=drag_model,
            muzzle_velocity=muzzle_velocity,
            sight_to_bore_rad=bore_rad,
            gx=gravity * math.sin(elevation_rad),
            gy=gravity * math.cos(elevation_rad),
            x=0.0,
            y=-sight_height_in / cInchesPerFoot,
            vx=muzzle_velocity * math.cos(bore_rad),
            vy=muzzle_velocity * math.sin(bore_rad),
            time=0.0,
        )

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def is_steep(self, ratio: float) -> bool:
        return abs(self.vy) > ratio * abs(self.vx)


def kinematic_step(state: ProjectileState, dt: float, headwind_fps: float = 0.0) -> Tuple[float, float, float]:
    """Advance ``state`` by ``dt`` seconds.

    Drag is looked up at the speed relative to the air and applied opposite to
    the velocity; position advances by the average of old and new velocity.

    Returns:
        (speed, vx, vy) before the step.

    Raises:
        DragDomainError: If drag is undefined at the current air speed.
    """
    vx, vy = state.vx, state.vy
    speed = math.hypot(vx, vy)
    retardation = state.drag_model.retardation(speed + headwind_fps)

    state.vx = vx + dt * (-(vx / speed) * retardation + state.gx)
    state.vy = vy + dt * (-(vy / speed) * retardation + state.gy)
    state.x += dt * (state.vx + vx) / 2
    state.y += dt * (state.vy + vy) / 2
    state.time += dt
    return speed, vx, vy


class BaseIntegrationEngine(ABC):
    """All calculations are done in imperial units (feet and fps)."""

    ZERO_STEP: float = 1.0  # Zero search step, in feet of travel per integration step

    def __init__(self, _config: Optional[EngineConfigDict] = None):
        """Initialize the class.

        Args:
            _config: The configuration object.
        """
        self._config: EngineConfig = create_engine_config(_config)
        self.zero_iteration_count: int = 0

    @property
    def config(self) -> EngineConfig:
        return self._config

    def get_calc_step(self) -> float:
        """Get step size for integration."""
        return self._config.cStepMultiplier

    def get_zero_step(self) -> float:
        return self._config.cStepMultiplier * self.ZERO_STEP

    def launch(self, shot: Shot, drag_model: DragModel, sight_to_bore_deg: float) -> ProjectileState:
        return ProjectileState.launch(drag_model, shot.muzzle_velocity_fps, shot.sight_height_in,
                                      shot.shooting_angle_deg, sight_to_bore_deg,
                                      self._config.cGravityConstant)

    def find_zero_angle(self, shot: Shot) -> float:
        """Find the sight-to-bore angle that puts the trajectory at the zero point.

        The rifle is zeroed on level ground in the shot's zeroing atmosphere.

        Args:
            shot: The shot information.

        Returns:
            Sight-to-bore angle in degrees.

        Raises:
            ZeroFindingError: If no angle below the configured maximum reaches the zero point.
            DragDomainError: If a candidate trajectory leaves the drag table domain.
        """
        corrected_bc = shot.zeroing_atmosphere.correct(shot.drag_model.BC)
        angle_rad = self._find_zero_angle(shot.drag_model.with_bc(corrected_bc),
                                          shot.muzzle_velocity_fps,
                                          shot.sight_height_in,
                                          shot.zero_range_yd,
                                          shot.zero_height_in,
                                          shot.wind.headwind)
        return math.degrees(angle_rad)

    def _find_zero_angle(self, drag_model: DragModel, muzzle_velocity: float, sight_height_in: float,
                         zero_range_yd: float, y_intercept_in: float, headwind_mph: float = 0.0) -> float:
        """Bracketing search for the sight-to-bore angle.

        The angle climbs in steps starting at cZeroInitialStepDeg. Each time a
        candidate overshoots while climbing, or undershoots while descending,
        the step reverses and halves.

        Returns:
            Sight-to-bore angle in radians.

        Raises:
            ValueError: If muzzle_velocity is not positive.
        """
        if muzzle_velocity <= 0:
            raise ValueError("Muzzle velocity must be positive")
        _cSteepnessRatio = self._config.cSteepnessRatio
        max_angle = math.radians(self._config.cZeroMaxAngleDeg)
        accuracy = moa_to_rad(self._config.cZeroAccuracyMOA)
        target_x = zero_range_yd * cFeetPerYard
        target_y = y_intercept_in / cInchesPerFoot
        headwind_fps = mph_to_fps(headwind_mph)
        zero_step = self.get_zero_step()

        angle = 0.0
        da = math.radians(self._config.cZeroInitialStepDeg)
        iterations_count = 0
        while True:
            iterations_count += 1
            state = ProjectileState.launch(drag_model, muzzle_velocity, sight_height_in,
                                           0.0, math.degrees(angle), self._config.cGravityConstant)
            height = self._height_at(state, target_x, target_y, headwind_fps, zero_step, _cSteepnessRatio)

            if height > target_y and da > 0:
                da = -da / 2
            if height < target_y and da < 0:
                da = -da / 2

            if abs(da) < accuracy:
                break
            if angle > max_angle:
                logger.debug(f"Zero search gave up at {math.degrees(angle):.4f} deg "
                             f"after {iterations_count} iterations")
                self.zero_iteration_count += iterations_count
                raise ZeroFindingError(math.degrees(angle), iterations_count)
            angle += da

        logger.debug(f"Zero search found {math.degrees(angle):.6f} deg in {iterations_count} iterations")
        self.zero_iteration_count += iterations_count
        return angle

    @staticmethod
    def _height_at(state: ProjectileState, target_x: float, target_y: float, headwind_fps: float,
                   zero_step: float, steepness_ratio: float) -> float:
        """Height of a candidate trajectory when it reaches target_x, or where it gave up.

        A candidate that turns steeper than steepness_ratio never reaches the
        target and reports -inf.
        """
        while state.x <= target_x:
            kinematic_step(state, zero_step / state.speed, headwind_fps)
            if state.vy < 0 and state.y < target_y:
                break
            if state.is_steep(steepness_ratio):
                return -math.inf
        return state.y

    @abstractmethod
    def integrate(self, shot: Shot) -> Solution:
        """Compute the trajectory of ``shot``, zeroing it first if needed."""
        raise NotImplementedError
