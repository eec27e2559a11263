import logging

import pytest

from py_gnuballistics import Calculator, reset_engine_config_defaults
from py_gnuballistics.logger import logger
from tests.fixtures_and_helpers import create_reference_shot

logger.setLevel(logging.DEBUG)


@pytest.fixture
def calc():
    return Calculator()


@pytest.fixture
def reference_shot():
    return create_reference_shot()


@pytest.fixture
def clean_engine_defaults():
    reset_engine_config_defaults()
    yield
    reset_engine_config_defaults()
