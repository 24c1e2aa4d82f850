"""
Central configuration for the optimizer.

Flat-constant interface derived from the structured config singleton in
``config_structured.py`` so there is a single source of truth.

Search for ``# STATUS:`` to locate what reads each constant.
"""
from pathlib import Path

from .config_structured import get_config as _get_config

_cfg = _get_config()

# ── Paths ──────────────────────────────────────────────────────────────
ROOT_DIR = Path(__file__).parent                  # STATUS: ACTIVE — base path for all relative references
CONFIG_DATA_DIR = ROOT_DIR / "config_data"        # STATUS: ACTIVE — objectives/target_config.py sample targets
DEFAULT_TARGETS_FILE = CONFIG_DATA_DIR / "targets.yaml"  # STATUS: ACTIVE — run_target.py --config default
RESULTS_DIR = ROOT_DIR / "results"                # STATUS: ACTIVE — run_target.py default results directory

# ── Objectives ────────────────────────────────────────────────────────
OBJECTIVE_DEFAULT_SECTION = _cfg.objectives.default_section  # STATUS: ACTIVE — objectives/objective.py; bare names resolve here
OBJECTIVE_DEFAULT_EXTREMUM = _cfg.objectives.default_extremum.value  # STATUS: ACTIVE — target_config.py, run_target.py

# ── Logging ───────────────────────────────────────────────────────────
LOG_LEVEL = _cfg.logging.level                    # STATUS: ACTIVE — run_target.py
LOG_STRUCTURED = _cfg.logging.structured          # STATUS: ACTIVE — run_target.py; JSON lines vs plain text

# ── Replay ────────────────────────────────────────────────────────────
REPLAY_RESULT_GLOB = _cfg.replay.result_glob      # STATUS: ACTIVE — run_target.py directory expansion
REPLAY_STOP_ON_REACHED = _cfg.replay.stop_on_reached  # STATUS: ACTIVE — run_target.py early exit


def validate_config() -> list:
    """Check config for common misconfigurations.

    Returns a list of dicts: [{"level": "WARNING"|"ERROR", "message": str}].
    Called by run_target.py before replaying results.
    """
    issues = []

    if "." in OBJECTIVE_DEFAULT_SECTION or "[" in OBJECTIVE_DEFAULT_SECTION:
        issues.append({
            "level": "ERROR",
            "message": (
                f"OBJECTIVE_DEFAULT_SECTION={OBJECTIVE_DEFAULT_SECTION!r} must be a single "
                "field name; bare statistic names would resolve to a nested path."
            ),
        })

    if not REPLAY_RESULT_GLOB.strip():
        issues.append({
            "level": "ERROR",
            "message": "REPLAY_RESULT_GLOB is empty — no result files would be replayed.",
        })

    if not DEFAULT_TARGETS_FILE.exists():
        issues.append({
            "level": "WARNING",
            "message": (
                f"DEFAULT_TARGETS_FILE {DEFAULT_TARGETS_FILE} not found — "
                "run_target.py needs --target or --config."
            ),
        })

    return issues
