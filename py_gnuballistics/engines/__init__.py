"""Integration engines for point-mass trajectory calculations.

Available Engines:
    - BaseIntegrationEngine: Abstract base class holding configuration and the zero search
    - TrapezoidIntegrationEngine: Trapezoidal integrator (default)

Configuration:
    - All engines accept EngineConfigDict for configuration.

Examples:
    >>> from py_gnuballistics.engines import TrapezoidIntegrationEngine, EngineConfigDict
    >>> custom_config = EngineConfigDict(cStepMultiplier=0.5)
    >>> from py_gnuballistics import Calculator
    >>> calc = Calculator(config=custom_config, engine=TrapezoidIntegrationEngine)
"""

from .base_engine import *
from .trapezoid import *

__all__ = (
    # Base engine infrastructure
    'create_engine_config',
    'set_engine_config_defaults',
    'reset_engine_config_defaults',
    'EngineConfig',
    'EngineConfigDict',
    'DEFAULT_ENGINE_CONFIG',
    'ProjectileState',
    'kinematic_step',
    'BaseIntegrationEngine',

    # Integration engines
    'TrapezoidIntegrationEngine',
)
