"""Firing conditions used by the zero solver and the trajectory integrator.

What this module provides
- Atmospheric correction: closed-form empirical factors that rescale a
    ballistic coefficient measured at standard conditions to the actual
    altitude, pressure, temperature and humidity.
- Atmosphere: A record of weather conditions that computes its correction
    factor and returns corrected coefficients.
- Wind: Constant wind described by speed and the angle it blows from,
    resolved into headwind and crosswind components.
- Shot: Every input needed to zero a rifle and compute a trajectory.

Design notes
- Units: miles per hour for wind, degrees for angles, feet for altitude,
    inches of mercury for pressure, Fahrenheit for temperature and a
    fraction in [0, 1] for relative humidity.
- Wind angle: 0° is a pure headwind, 90° blows from right to left,
    180° is a tailwind and 270° (or -90°) blows from left to right.
- Correction never mutates its input: `Atmosphere.correct(bc)` returns the
    adjusted value.

Examples:
>>> atmo = Atmosphere(altitude_ft=5000, pressure_inhg=29.0, temperature_f=40, humidity=0.5)
>>> corrected_bc = atmo.correct(0.465)
>>> breeze = Wind(speed_mph=10, angle_deg=90)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from typing_extensions import Optional

from py_gnuballistics.constants import (
    cStandardAltitudeFt,
    cStandardPressure,
    cStandardTemperatureF,
    cStandardHumidity,
    cLapseRateImperial,
    cTemperatureRankineOffset,
)
from py_gnuballistics.drag_model import DragModel

__all__ = (
    "altitude_factor",
    "temperature_factor",
    "humidity_factor",
    "pressure_factor",
    "atmospheric_correction",
    "headwind",
    "crosswind",
    "Atmosphere",
    "Wind",
    "Shot",
)


def altitude_factor(altitude_ft: float) -> float:
    """Density factor for altitude above sea level."""
    a = altitude_ft
    return 1.0 / (-4e-15 * a ** 3 + 4e-10 * a ** 2 - 3e-5 * a + 1)


def temperature_factor(temperature_f: float, altitude_ft: float) -> float:
    """Deviation of temperature from the standard temperature at altitude."""
    t_std = cLapseRateImperial * altitude_ft + cStandardTemperatureF
    return (temperature_f - t_std) / (cTemperatureRankineOffset + t_std)


def humidity_factor(temperature_f: float, pressure_inhg: float, humidity: float) -> float:
    """Density factor for water vapor.

    Args:
        temperature_f: Air temperature (°F)
        pressure_inhg: Barometric pressure (InHg)
        humidity: Relative humidity as a fraction [0, 1]
    """
    t = temperature_f
    vapor_pressure = 4e-6 * t ** 3 - 0.0004 * t ** 2 + 0.0234 * t - 0.2517
    return 0.995 * pressure_inhg / (pressure_inhg - 0.3783 * humidity * vapor_pressure)


def pressure_factor(pressure_inhg: float) -> float:
    return (pressure_inhg - cStandardPressure) / cStandardPressure


def atmospheric_correction(altitude_ft: float, pressure_inhg: float,
                           temperature_f: float, humidity: float) -> float:
    """Multiplier converting a standard-conditions ballistic coefficient to actual conditions.

    Combines the sub-factors as ``FA * (1 + FT - FP) * FR``.
    """
    fa = altitude_factor(altitude_ft)
    ft = temperature_factor(temperature_f, altitude_ft)
    fr = humidity_factor(temperature_f, pressure_inhg, humidity)
    fp = pressure_factor(pressure_inhg)
    return fa * (1 + ft - fp) * fr


def headwind(speed_mph: float, angle_deg: float) -> float:
    """Component of the wind blowing against the direction of fire (mph)."""
    return speed_mph * math.cos(math.radians(angle_deg))


def crosswind(speed_mph: float, angle_deg: float) -> float:
    """Component of the wind blowing from right to left (mph)."""
    return speed_mph * math.sin(math.radians(angle_deg))


@dataclass(frozen=True)
class Atmosphere:
    """Weather conditions at the firing point.

    Attributes:
        altitude_ft: Altitude above sea level (ft)
        pressure_inhg: Barometric pressure (InHg)
        temperature_f: Air temperature (°F)
        humidity: Relative humidity, fraction [0, 1]
    """

    altitude_ft: float = cStandardAltitudeFt
    pressure_inhg: float = cStandardPressure
    temperature_f: float = cStandardTemperatureF
    humidity: float = cStandardHumidity

    def __post_init__(self) -> None:
        if not 0.0 <= self.humidity <= 1.0:
            raise ValueError(f"Relative humidity must be between 0 and 1, got {self.humidity}")
        if self.pressure_inhg <= 0:
            raise ValueError("Barometric pressure must be positive")

    @staticmethod
    def standard() -> Atmosphere:
        """Conditions the drag tables are referenced to."""
        return Atmosphere()

    @property
    def correction_factor(self) -> float:
        return atmospheric_correction(self.altitude_ft, self.pressure_inhg,
                                      self.temperature_f, self.humidity)

    def correct(self, bc: float) -> float:
        """Ballistic coefficient adjusted to these conditions.

        Args:
            bc: Coefficient measured at standard conditions

        Returns:
            The corrected coefficient; ``bc`` itself is left untouched
        """
        return bc * self.correction_factor


@dataclass(frozen=True)
class Wind:
    """Constant wind over the whole trajectory.

    Attributes:
        speed_mph: Wind speed (mph)
        angle_deg: Direction the wind blows from. 0° is a headwind,
            90° blows from right to left.
    """

    speed_mph: float = 0.0
    angle_deg: float = 0.0

    @property
    def headwind(self) -> float:
        return headwind(self.speed_mph, self.angle_deg)

    @property
    def crosswind(self) -> float:
        return crosswind(self.speed_mph, self.angle_deg)


@dataclass
class Shot:
    """All information needed to zero a rifle and compute a trajectory.

    Attributes:
        drag_model: Projectile drag function and standard-conditions ballistic coefficient.
        muzzle_velocity_fps: Initial velocity (fps).
        sight_height_in: Height of the sight above the bore axis (in).
        zero_range_yd: Range at which the sight line and trajectory intersect (yd).
        zero_height_in: Height above the sight line the projectile should strike at zero range (in).
        shooting_angle_deg: Uphill (+) or downhill (-) angle of the line of sight.
        wind: Wind in effect during the shot.
        atmosphere: Weather in effect during the shot.
        zero_atmosphere: Weather the rifle was zeroed in. Defaults to `atmosphere`.
        sight_to_bore_angle_deg: Launch angle between sight line and bore.
            None until the shot has been zeroed.
    """

    drag_model: DragModel
    muzzle_velocity_fps: float
    sight_height_in: float = 1.5
    zero_range_yd: float = 100.0
    zero_height_in: float = 0.0
    shooting_angle_deg: float = 0.0
    wind: Wind = field(default_factory=Wind)
    atmosphere: Atmosphere = field(default_factory=Atmosphere)
    zero_atmosphere: Optional[Atmosphere] = None
    sight_to_bore_angle_deg: Optional[float] = None

    def __post_init__(self) -> None:
        if self.muzzle_velocity_fps <= 0:
            raise ValueError("Muzzle velocity must be positive")
        if self.sight_height_in < 0:
            raise ValueError("Sight height must not be negative")
        if self.zero_range_yd <= 0:
            raise ValueError("Zero range must be positive")

    @property
    def zeroing_atmosphere(self) -> Atmosphere:
        return self.zero_atmosphere if self.zero_atmosphere is not None else self.atmosphere
