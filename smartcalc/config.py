"""Configuration for SmartCalc.

Settings live in <project>/.smartcalc/config.json:
- solver: LLM server host, model, temperature, timeout
- display: row truncation, compact mode
- logging: log level

OLLAMA_HOST and SMARTCALC_MODEL override the file.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_DIR = ".smartcalc"
CONFIG_FILE = "config.json"


@dataclass
class CalcConfig:
    """SmartCalc configuration options."""

    # Solver
    solver_host: str = "http://localhost:11434"
    solver_model: str = "llama3.2"
    solver_temperature: float = 0.1  # Low temperature for deterministic answers
    solver_timeout: float = 30.0  # Seconds before a solve gives up
    solver_decimal_places: Optional[int] = None  # None = let the model decide

    # Display
    display_max_length: int = 24  # 0 = unlimited
    compact_mode: bool = False

    # Logging
    log_level: str = "WARNING"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "solver": {
                "host": self.solver_host,
                "model": self.solver_model,
                "temperature": self.solver_temperature,
                "timeout": self.solver_timeout,
                "decimal_places": self.solver_decimal_places,
            },
            "display": {
                "max_length": self.display_max_length,
                "compact_mode": self.compact_mode,
            },
            "logging": {
                "level": self.log_level,
            },
        }


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        logger.warning("Invalid %s section: %r, using defaults", name, section)
        return {}
    return section


def _flag(section: dict, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        logger.warning("Invalid value for %s: %r, using %r", key, value, default)
        return default
    return value


def _number(section: dict, key: str, default, cast):
    value = section.get(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning("Invalid value for %s: %r, using %r", key, value, default)
        return default


def _optional_int(section: dict, key: str) -> Optional[int]:
    value = section.get(key)
    if value is None:
        return None
    return _number(section, key, None, int)


def load_config(project_path: str = ".") -> CalcConfig:
    """Load configuration from the project config file and environment.

    Args:
        project_path: Path to project root.

    Returns:
        CalcConfig with settings from config.json, environment, or defaults.
    """
    defaults = CalcConfig()
    data = {}
    config_file = Path(project_path) / CONFIG_DIR / CONFIG_FILE

    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Ignoring unreadable config %s: %s", config_file, e)
            data = {}
        if not isinstance(data, dict):
            data = {}

    solver = _section(data, "solver")
    display = _section(data, "display")
    logging_section = _section(data, "logging")

    config = CalcConfig(
        solver_host=solver.get("host", defaults.solver_host),
        solver_model=solver.get("model", defaults.solver_model),
        solver_temperature=_number(solver, "temperature", defaults.solver_temperature, float),
        solver_timeout=_number(solver, "timeout", defaults.solver_timeout, float),
        solver_decimal_places=_optional_int(solver, "decimal_places"),
        display_max_length=_number(display, "max_length", defaults.display_max_length, int),
        compact_mode=_flag(display, "compact_mode", defaults.compact_mode),
        log_level=str(logging_section.get("level", defaults.log_level)).upper(),
    )

    if os.environ.get("OLLAMA_HOST"):
        config.solver_host = os.environ["OLLAMA_HOST"]
    if os.environ.get("SMARTCALC_MODEL"):
        config.solver_model = os.environ["SMARTCALC_MODEL"]

    return config
