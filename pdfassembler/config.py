"""Runtime configuration for PDF Assembler.

Settings are read from ``PDFASSEMBLER_*`` environment variables so the
library, the CLI and tests can adjust behaviour without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

_ENV_PREFIX = "PDFASSEMBLER_"

DEFAULT_PRODUCER = "PDF Assembler"
SPLITTER_CREATOR = "PDF Assembler PDF Splitter"
MERGER_CREATOR = "PDF Assembler PDF Merger"


@dataclass(frozen=True)
class AssemblerSettings:
    """Tunable values used by the extractor, merger and thumbnailer."""

    producer: str = DEFAULT_PRODUCER
    thumbnail_scale: float = 0.5
    thumbnail_max_pages: int | None = None
    placeholder_width: int = 200
    placeholder_height: int = 280
    fallback_bytes_per_page: int = 50_000
    fallback_max_pages: int = 50
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.thumbnail_scale <= 0:
            raise ValueError("thumbnail_scale must be positive")
        if self.thumbnail_max_pages is not None and self.thumbnail_max_pages < 1:
            raise ValueError("thumbnail_max_pages must be >= 1")
        if self.placeholder_width < 1 or self.placeholder_height < 1:
            raise ValueError("placeholder dimensions must be positive")
        if self.fallback_bytes_per_page < 1 or self.fallback_max_pages < 1:
            raise ValueError("fallback estimate parameters must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AssemblerSettings":
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        producer = env.get(_ENV_PREFIX + "PRODUCER")
        if producer and producer.strip():
            values["producer"] = producer.strip()

        scale = env.get(_ENV_PREFIX + "THUMBNAIL_SCALE")
        if scale is not None:
            values["thumbnail_scale"] = _parse_float("THUMBNAIL_SCALE", scale)

        max_pages = env.get(_ENV_PREFIX + "THUMBNAIL_MAX_PAGES")
        if max_pages is not None and max_pages.strip():
            values["thumbnail_max_pages"] = _parse_int("THUMBNAIL_MAX_PAGES", max_pages)

        for field_name in ("placeholder_width", "placeholder_height"):
            raw = env.get(_ENV_PREFIX + field_name.upper())
            if raw is not None:
                values[field_name] = _parse_int(field_name.upper(), raw)

        log_level = env.get(_ENV_PREFIX + "LOG_LEVEL")
        if log_level and log_level.strip():
            values["log_level"] = log_level.strip().upper()

        return cls(**values)  # type: ignore[arg-type]


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}{name} must be a number, got {raw!r}") from exc


_settings: AssemblerSettings | None = None


def get_settings() -> AssemblerSettings:
    """Return process-wide settings, loading them from the environment once."""

    global _settings
    if _settings is None:
        _settings = AssemblerSettings.from_env()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None


__all__ = [
    "AssemblerSettings",
    "DEFAULT_PRODUCER",
    "MERGER_CREATOR",
    "SPLITTER_CREATOR",
    "get_settings",
    "reset_settings",
]
