"""
Utility functions for ESGenius

Provides logging setup, number formatting, JSON I/O and the exception hierarchy
"""

import json
import logging
import math
from pathlib import Path
from typing import Optional


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO", log_file: Optional[str | Path] = None) -> None:
    """Configure logging for ESGenius"""
    level = getattr(logging, log_level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance for module"""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════════════
# NUMBERS
# ═══════════════════════════════════════════════════════════════════

def is_number(value) -> bool:
    """True for int/float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def percent_change(baseline: float | None, result: float | None) -> float:
    """Percent change from baseline to result, rounded to 1 decimal.

    A zero or missing baseline yields 0.0; a missing result counts as 0.
    """
    if not baseline:
        return 0.0
    return round(((result or 0.0) - baseline) / baseline * 100, 1)


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` when it is integral."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


# ═══════════════════════════════════════════════════════════════════
# FILE I/O
# ═══════════════════════════════════════════════════════════════════

def read_json(file_path: str | Path) -> dict:
    """Read JSON file"""
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_text(content: str, file_path: str | Path) -> Path:
    """Write text file, creating parent directories"""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(content)
    return file_path


# ═══════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════

class ESGeniusError(Exception):
    """Base exception for ESGenius"""
    pass


class InvalidRatingError(ESGeniusError, ValueError):
    """Materiality rating outside [1, 5] or not an integer"""

    def __init__(self, dimension: str, value) -> None:
        self.dimension = dimension
        self.value = value
        super().__init__(
            f"{dimension} rating must be an integer between 1 and 5, got {value!r}"
        )


class InvalidAdjustmentError(ESGeniusError, ValueError):
    """Adjustment with an unknown type or a non-numeric value"""

    def __init__(self, metric: str, reason: str) -> None:
        self.metric = metric
        self.reason = reason
        super().__init__(f"Invalid adjustment for '{metric}': {reason}")


class InvalidIterationCountError(ESGeniusError, ValueError):
    """Non-positive simulation iteration or sweep step count"""

    def __init__(self, count) -> None:
        self.count = count
        super().__init__(f"Iteration count must be a positive integer, got {count!r}")


class UnsupportedFormatError(ESGeniusError, ValueError):
    """Export format other than json or csv"""

    def __init__(self, fmt) -> None:
        self.format = fmt
        super().__init__(f"Unsupported export format {fmt!r}; expected 'json' or 'csv'")


class InvalidScenarioError(ESGeniusError, ValueError):
    """Scenario definition error"""
    pass


class InvalidUncertaintyError(ESGeniusError, ValueError):
    """Monte Carlo uncertainty that is not a mapping of numeric mean/std_dev"""

    def __init__(self, metric: str, reason: str) -> None:
        self.metric = metric
        self.reason = reason
        super().__init__(f"Invalid uncertainty for '{metric}': {reason}")


class InvalidTopicError(ESGeniusError, ValueError):
    """Materiality topic missing its id"""
    pass


class UnknownPresetError(ESGeniusError, KeyError):
    """Preset scenario id not in the catalog"""

    def __init__(self, preset_id: str) -> None:
        self.preset_id = preset_id
        super().__init__(preset_id)

    def __str__(self) -> str:
        return f"Unknown preset scenario '{self.preset_id}'"
