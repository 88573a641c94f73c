"""Explorer configuration and logging setup."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .io import load_json_config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

_FIELD_TYPES = {
    "fc_threshold": float,
    "fdr_threshold": float,
    "top_n": int,
    "show_labels": bool,
    "n_points": int,
    "effect_span": float,
    "search_pad": float,
    "min_drag_px": float,
    "seed": int,
    "annotations_enabled": bool,
    "annotation_timeout": float,
}


def _coerce(key: str, value: Any) -> Any:
    """Convert a JSON value to the field's type; ``ValueError`` if it does not fit."""
    kind = _FIELD_TYPES[key]
    if value is None and key == "seed":
        return None
    if kind is bool:
        if not isinstance(value, bool):
            raise ValueError(f"{key} must be true or false, got {value!r}.")
        return value
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number, got {value!r}.")
    if kind is int and isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number, got {value!r}.") from None
    if kind is int:
        if not number.is_integer():
            raise ValueError(f"{key} must be an integer, got {value!r}.")
        return int(number)
    return number


@dataclass
class ExplorerConfig:
    """Startup settings for a volcano explorer session."""

    fc_threshold: float = 1.0
    fdr_threshold: float = 0.05
    top_n: int = 10
    show_labels: bool = True
    n_points: int = 1200
    effect_span: float = 6.0
    search_pad: float = 1.2
    min_drag_px: float = 4.0
    seed: int | None = None
    annotations_enabled: bool = True
    annotation_timeout: float = 5.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExplorerConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        cfg = cls(**{key: _coerce(key, value) for key, value in data.items()})
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.n_points < 0:
            raise ValueError(f"n_points must be non-negative, got {self.n_points}.")
        if self.effect_span <= 0:
            raise ValueError(f"effect_span must be positive, got {self.effect_span}.")
        if self.search_pad <= 0:
            raise ValueError(f"search_pad must be positive, got {self.search_pad}.")
        if self.annotation_timeout <= 0:
            raise ValueError(
                f"annotation_timeout must be positive, got {self.annotation_timeout}."
            )

    def with_overrides(self, **overrides: Any) -> "ExplorerConfig":
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        cfg = dataclasses.replace(self, **changes)
        cfg.validate()
        return cfg


def load_config(path: str | Path | None = None) -> ExplorerConfig:
    """Load an :class:`ExplorerConfig` from JSON, or the defaults if *path* is ``None``."""
    if path is None:
        return ExplorerConfig()
    return ExplorerConfig.from_mapping(load_json_config(path))


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("volcano_explorer")
    logger.setLevel(level)
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
