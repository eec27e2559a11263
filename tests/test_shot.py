import pytest

from py_gnuballistics import Atmosphere, DragFunction, DragModel, Shot, Wind


def _dm():
    return DragModel(0.3, DragFunction.G7)


def test_defaults():
    shot = Shot(drag_model=_dm(), muzzle_velocity_fps=2800)
    assert shot.wind == Wind()
    assert shot.atmosphere == Atmosphere.standard()
    assert shot.zero_atmosphere is None
    assert shot.zeroing_atmosphere is shot.atmosphere
    assert shot.sight_to_bore_angle_deg is None


def test_zeroing_atmosphere():
    zero_day = Atmosphere(temperature_f=20)
    shot = Shot(drag_model=_dm(), muzzle_velocity_fps=2800, zero_atmosphere=zero_day)
    assert shot.zeroing_atmosphere is zero_day


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(muzzle_velocity_fps=0),
        dict(muzzle_velocity_fps=-100),
        dict(muzzle_velocity_fps=2800, sight_height_in=-1),
        dict(muzzle_velocity_fps=2800, zero_range_yd=0),
    ],
)
def test_invalid(kwargs):
    with pytest.raises(ValueError):
        Shot(drag_model=_dm(), **kwargs)
