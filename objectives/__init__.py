"""
Optimization objectives — best-value tracking over evaluation results.

Components:
    - Target: tracks the best value of one statistic and signals when a
      target value is reached
    - Extremum: maximize/minimize direction with strict "better than"
    - parse_decimal: exact normalization of plain, percentage and currency text
    - parse_path / select_token: field paths into result documents
    - load_targets: targets declared in YAML/JSON config files
"""
from .errors import ConfigError, InvalidArgumentError, ObjectiveError, ParseError
from .extremum import Extremum
from .field_locator import format_path, parse_path, select_token
from .numeric import parse_decimal
from .objective import Objective
from .target import Target, TargetSchema
from .target_config import load_targets

__all__ = [
    "ConfigError",
    "Extremum",
    "InvalidArgumentError",
    "Objective",
    "ObjectiveError",
    "ParseError",
    "Target",
    "TargetSchema",
    "format_path",
    "load_targets",
    "parse_decimal",
    "parse_path",
    "select_token",
]
