import math

from py_gnuballistics.constants import cMphToFps, cMphToInchesPerSecond

__all__ = (
    'moa_to_rad',
    'rad_to_moa',
    'mph_to_fps',
    'mph_to_ips',
    'vacuum_time',
)


def moa_to_rad(moa: float) -> float:
    """Minutes of angle to radians."""
    return math.radians(moa / 60.0)


def rad_to_moa(rad: float) -> float:
    """Radians to minutes of angle."""
    return math.degrees(rad) * 60.0


def mph_to_fps(mph: float) -> float:
    return mph * cMphToFps


def mph_to_ips(mph: float) -> float:
    """Miles per hour to inches per second, the unit windage is computed in."""
    return mph * cMphToInchesPerSecond


def vacuum_time(range_ft: float, muzzle_velocity_fps: float) -> float:
    """
    Time of flight to range_ft with no drag.
       Windage drift is proportional to the lag between the real time of flight
       and this value.

    Args:
        range_ft: Downrange distance in feet.
        muzzle_velocity_fps: Initial velocity of the projectile.

    Returns:
        Time in seconds.
    """
    return range_ft / muzzle_velocity_fps
