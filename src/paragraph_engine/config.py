"""Editor configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "PARAGRAPH_ENGINE_"


class ConfigError(ValueError):
    """Raised when a configuration value is missing a sane range."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


def _env_float(
    environ: Mapping[str, str], name: str, fallback: float
) -> float:
    raw = environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return fallback
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"{ENV_PREFIX}{name} must be a number, got {raw!r}", key=name
        ) from exc


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Canvas size and text metrics the dispatcher lays text out against."""

    width: float = 640.0
    height: float = 480.0
    font_size: float = 16.0
    initial_text: str = ""

    def __post_init__(self) -> None:
        for key in ("width", "height", "font_size"):
            if getattr(self, key) <= 0:
                raise ConfigError(f"{key} must be positive", key=key)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: object
    ) -> "EditorConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        config = cls(
            width=_env_float(env, "WIDTH", defaults.width),
            height=_env_float(env, "HEIGHT", defaults.height),
            font_size=_env_float(env, "FONT_SIZE", defaults.font_size),
            initial_text=env.get(f"{ENV_PREFIX}INITIAL_TEXT", defaults.initial_text),
        )
        return config.with_changes(**overrides) if overrides else config

    def with_changes(self, **changes: object) -> "EditorConfig":
        return replace(self, **changes)  # type: ignore[arg-type]


__all__ = ["ConfigError", "EditorConfig", "ENV_PREFIX"]
