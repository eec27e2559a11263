"""Point-mass exterior ballistics library."""

import importlib.metadata

__version__ = importlib.metadata.version("py_gnuballistics")

# Standard library imports
import os
import sys

# Third-party imports
from typing_extensions import Optional

# Local imports
from .logger import logger as log
from .engines.base_engine import EngineConfigDict, set_engine_config_defaults, reset_engine_config_defaults

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib


def _find_pygb_toml(start_dir: Optional[str] = None) -> Optional[str]:
    """Search for .pygb.toml or pygb.toml from start_dir (default: cwd) upward.

    Returns:
        The absolute path to the file if found, otherwise None.
    """
    current_dir = os.path.abspath(start_dir or os.getcwd())
    while True:
        for pygb_path in (os.path.join(current_dir, '.pygb.toml'),
                          os.path.join(current_dir, 'pygb.toml')):
            if os.path.exists(pygb_path):
                return os.path.abspath(pygb_path)

        parent_dir = os.path.dirname(current_dir)
        if parent_dir == current_dir:
            return None
        current_dir = parent_dir


def _load_config(filepath: Optional[str] = None, suppress_warnings: bool = False) -> None:
    """Load engine defaults from the `[pygb.engine]` table of a toml file.

    Args:
        filepath: Path to configuration file. If None, searches for .pygb.toml or pygb.toml
        suppress_warnings: If True, suppress warning messages
    """
    if filepath is None:
        filepath = _find_pygb_toml()

    if filepath is not None:
        log.debug(f"Found {os.path.basename(filepath)} at {os.path.dirname(filepath)}")

        with open(filepath, "rb") as fp:
            _config = tomllib.load(fp)

            if _pygb := _config.get('pygb'):
                if engine := _pygb.get('engine'):
                    set_engine_config_defaults(engine)
                elif not suppress_warnings:
                    log.warning("Config has no `pygb.engine` section")
            elif not suppress_warnings:
                log.warning("Config has no `pygb` section")

    log.debug("Engine config defaults load success")


def _basic_config(filename: Optional[str] = None,
                  engine_config: Optional[EngineConfigDict] = None,
                  suppress_warnings: bool = False) -> None:
    """Load engine config defaults from file or Mapping.

    Args:
        filename: Configuration file path
        engine_config: Dictionary of engine config defaults
        suppress_warnings: If True, suppress warning messages

    Raises:
        ValueError: If both filename and engine_config are provided
    """
    if filename and engine_config:
        raise ValueError("Can't use engine_config and config file at same time")
    if not filename and engine_config:
        set_engine_config_defaults(engine_config)
    else:
        reset_engine_config_defaults()
        _load_config(filename, suppress_warnings)


basicConfig = _basic_config

basicConfig()


from .conditions import Atmosphere, Wind, Shot, atmospheric_correction, headwind, crosswind
from .constants import cGravityConstant, cMaxSamples
from .drag_model import DragModel, DragBreakpoint, drag_retardation, make_breakpoints
from .drag_tables import (DragFunction, TableG1, TableG2, TableG5, TableG6, TableG7, TableG8,
                          get_drag_table, get_drag_tables_names)
from .engines import (create_engine_config, EngineConfig, BaseIntegrationEngine,
                      TrapezoidIntegrationEngine, ProjectileState, kinematic_step)
from .exceptions import SolverRuntimeError, DragDomainError, ZeroFindingError, RangeError
from .interface import Calculator
from .logger import logger, enable_file_logging, disable_file_logging
from .trajectory_data import TrajectorySample, SampleBuffer, TerminationReason, Solution

# DRY: build __all__ from global symbols
_SKIP_GLOBALS = {
    # Skip Python builtins
    "__name__", "__doc__", "__package__", "__loader__", "__spec__",
    "__file__", "__cached__", "__builtins__",
    # Skip imported modules
    "tomllib", "sys", "os", "importlib",
    # Skip private/internal symbols and internal aliases
    "log", "set_engine_config_defaults", "reset_engine_config_defaults",
    "Optional",
}
# Build __all__ from the module's global namespace
__all__ = [
    name for name in globals()
    if not name.startswith("_") and name not in _SKIP_GLOBALS
]
