"""
Targets file — optimization targets declared in YAML or JSON.

Expected layout (``config_data/targets.yaml``)::

    targets:
      - target: Sharpe Ratio
        extremum: max
        target-value: "1.5"
      - target: "['Statistics'].['Drawdown']"
        extremum: min

``extremum`` defaults to ``OBJECTIVE_DEFAULT_EXTREMUM`` when omitted.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..config import DEFAULT_TARGETS_FILE, OBJECTIVE_DEFAULT_EXTREMUM
from .errors import ConfigError, ObjectiveError
from .target import Target

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must be a mapping at the top level.")
    return data


def build_target(entry: Dict[str, Any]) -> Target:
    """Build one ``Target`` from a targets-file entry."""
    if not isinstance(entry, dict):
        raise ConfigError(f"Target entry must be a mapping, got {type(entry).__name__}")
    definition = dict(entry)
    definition.setdefault("extremum", OBJECTIVE_DEFAULT_EXTREMUM)
    # YAML reads 1.5 as a float; its shortest repr is the text that was written.
    if isinstance(definition.get("target-value"), float):
        definition["target-value"] = repr(definition["target-value"])
    try:
        return Target.from_dict(definition)
    except ObjectiveError as e:
        raise ConfigError(f"Invalid target entry {entry!r}: {e}") from e


def load_targets(path: Optional[Union[str, Path]] = None) -> List[Target]:
    """Load every target declared in a targets file.

    Parameters
    ----------
    path : str or Path, optional
        YAML (or JSON, a YAML subset) file.  Defaults to
        ``config_data/targets.yaml``.

    Raises
    ------
    ConfigError
        If the file is missing, unparsable, has no ``targets`` list, or any
        entry is invalid.
    """
    path = Path(path) if path is not None else DEFAULT_TARGETS_FILE
    if not path.exists():
        raise ConfigError(f"Targets file not found at {path}.")

    raw = _load_yaml(path)
    entries = raw.get("targets")
    if not isinstance(entries, list) or not entries:
        raise ConfigError(f"{path.name} must contain a non-empty 'targets' list.")

    targets = [build_target(entry) for entry in entries]
    logger.info("Loaded %d target(s) from %s", len(targets), path)
    return targets
