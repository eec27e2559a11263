"""Physical, standard-condition and runtime constants.

All calculations are carried out in imperial units: feet, seconds, inches of
mercury and degrees Fahrenheit. Angular corrections are reported in minutes of
angle (MOA).

Constant Categories:
    - Physical constants: gravity
    - Standard atmosphere: the reference conditions the correction formulas were fit against
    - Conversion factors: unit conversion constants
    - Runtime limits: drag table domain and sample buffer capacity
"""

# Third-party imports
from typing_extensions import Final

# =============================================================================
# Physical Constants
# =============================================================================

cGravityConstant: Final[float] = -32.194  # feet per second squared
"""Gravitational acceleration used by the drag fits (ft/s²)"""

# =============================================================================
# Standard Atmosphere
# =============================================================================

cStandardAltitudeFt: Final[float] = 0.0
"""Standard altitude above sea level (ft)"""

cStandardPressure: Final[float] = 29.53  # InHg
"""Standard barometric pressure, station-corrected (InHg)"""

cStandardTemperatureF: Final[float] = 59.0  # °F
"""Standard temperature at sea level (°F)"""

cStandardHumidity: Final[float] = 0.78
"""Standard relative humidity (fraction)"""

cLapseRateImperial: Final[float] = -0.0036  # °F/ft
"""Temperature lapse rate used by the temperature correction (°F/ft)"""

cTemperatureRankineOffset: Final[float] = 459.6
"""Fahrenheit to absolute temperature offset used by the temperature correction"""

# =============================================================================
# Conversion Factors
# =============================================================================

cMphToFps: Final[float] = 5280.0 / 3600.0
"""Miles per hour to feet per second"""

cMphToInchesPerSecond: Final[float] = 17.60
"""Miles per hour to inches per second"""

cFeetPerYard: Final[float] = 3.0
cInchesPerFoot: Final[float] = 12.0

# =============================================================================
# Runtime Limits
# =============================================================================

cMaxDragVelocity: Final[float] = 10000.0
"""Drag tables are not defined at or above this speed (fps)"""

cMaxSamples: Final[int] = 50000
"""Default sample buffer capacity (one sample per yard)"""

__all__ = (
    'cGravityConstant',
    'cStandardAltitudeFt',
    'cStandardPressure',
    'cStandardTemperatureF',
    'cStandardHumidity',
    'cLapseRateImperial',
    'cTemperatureRankineOffset',
    'cMphToFps',
    'cMphToInchesPerSecond',
    'cFeetPerYard',
    'cInchesPerFoot',
    'cMaxDragVelocity',
    'cMaxSamples',
)
