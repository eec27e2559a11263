"""Ballistics calculator interface.

This module provides the `Calculator` class, the primary interface for zeroing
a rifle and computing trajectories. It wraps an integration engine class and
delegates any attribute it does not define to the engine instance.

Key Classes:
    - Calculator: Ballistics calculator over a pluggable engine class
"""
from dataclasses import dataclass, field
from typing import Any

from deprecated import deprecated
from typing_extensions import Optional, Type

from py_gnuballistics.conditions import Atmosphere, Shot
from py_gnuballistics.engines import BaseIntegrationEngine, EngineConfigDict, TrapezoidIntegrationEngine
from py_gnuballistics.logger import logger
from py_gnuballistics.trajectory_data import Solution

DEFAULT_ENGINE: Type[BaseIntegrationEngine] = TrapezoidIntegrationEngine


@dataclass
class Calculator:
    """Basic interface for the ballistics calculator."""

    config: Optional[EngineConfigDict] = field(default=None)
    engine: Type[BaseIntegrationEngine] = field(default=DEFAULT_ENGINE)
    _engine_instance: BaseIntegrationEngine = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.engine is None:
            self.engine = DEFAULT_ENGINE
        if not (isinstance(self.engine, type) and issubclass(self.engine, BaseIntegrationEngine)):
            raise TypeError("Invalid engine type, expected a BaseIntegrationEngine subclass")
        self._engine_instance = self.engine(self.config)

    def __getattr__(self, item: str) -> Any:
        """Delegate attribute access to the underlying engine instance.

        Raises:
            AttributeError: If the attribute is found on neither the
                `Calculator` object nor its `_engine_instance`.

        Examples:
            >>> calc = Calculator()
            >>> calc.get_calc_step()
            0.5
        """
        if item == '_engine_instance':
            raise AttributeError(item)
        if hasattr(self._engine_instance, item):
            return getattr(self._engine_instance, item)
        raise AttributeError(
            f"'{self.__class__.__name__}' object or its underlying engine "
            f"'{self._engine_instance.__class__.__name__}' has no attribute '{item}'"
        )

    @staticmethod
    def corrected_bc(shot: Shot, atmosphere: Optional[Atmosphere] = None) -> float:
        """Shot's ballistic coefficient corrected to `atmosphere` (defaults to the shot's)."""
        atmosphere = atmosphere or shot.atmosphere
        return atmosphere.correct(shot.drag_model.BC)

    def find_zero_angle(self, shot: Shot) -> float:
        """Sight-to-bore angle (degrees) that zeroes `shot`, leaving the shot unchanged.

        Raises:
            ZeroFindingError: If the zero point cannot be reached.
        """
        return self._engine_instance.find_zero_angle(shot)

    def set_zero(self, shot: Shot) -> float:
        """Set shot.sight_to_bore_angle_deg so that it hits the zero point.

        Args:
            shot: Shot instance to zero.
        """
        shot.sight_to_bore_angle_deg = self.find_zero_angle(shot)
        logger.debug(f"Zeroed at {shot.zero_range_yd} yd: {shot.sight_to_bore_angle_deg:.6f} deg")
        return shot.sight_to_bore_angle_deg

    def fire(self, shot: Shot, raise_range_error: bool = False) -> Solution:
        """Calculate the trajectory for the given shot parameters.

        Args:
            shot: Shot parameters. A shot with no sight-to-bore angle is zeroed first.
            raise_range_error: If True, raises RangeError if returned by integration.

        Returns:
            Solution: Object containing computed trajectory.
        """
        if shot.sight_to_bore_angle_deg is None:
            self.set_zero(shot)
        result = self._engine_instance.integrate(shot)
        if result.error and raise_range_error:
            raise result.error
        return result

    @deprecated(reason="Use Calculator.find_zero_angle()")
    def sight_to_bore_angle(self, shot: Shot) -> float:
        return self.find_zero_angle(shot)

    @deprecated(reason="Use Calculator.fire()")
    def solve_all(self, shot: Shot) -> Solution:
        return self.fire(shot)


__all__ = ('Calculator', 'DEFAULT_ENGINE',)
