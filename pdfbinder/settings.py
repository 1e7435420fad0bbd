"""Configuration management for pdfbinder."""

from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

from reportlab.pdfbase import pdfmetrics

from .exceptions import ConfigurationError
from .types import DEFAULT_WATERMARK_TEXT

LOGGER = logging.getLogger("pdfbinder.settings")

ENV_PREFIX = "PDFBINDER_"
CONFIG_TABLE = "pdfbinder"


@dataclasses.dataclass(frozen=True)
class BinderSettings:
    """Engine-wide defaults that are not part of a single operation's inputs."""

    watermark_text: str = DEFAULT_WATERMARK_TEXT
    creator: str = "VTU Notes Merging System"
    filename_suffix: str = DEFAULT_WATERMARK_TEXT
    thumbnail_scale: float = 0.3
    font: str = "Helvetica-Bold"
    cover_title: str = "VTU NOTES FOR ALL"
    cover_subtitle: str = "Handpicked study material, merged and ready to read"
    footer_text: str = "Shared free for every student. Please do not sell."

    def __post_init__(self) -> None:
        if not self.watermark_text.strip():
            raise ConfigurationError("watermark_text must not be empty")
        if not 0.05 <= self.thumbnail_scale <= 2.0:
            raise ConfigurationError(
                f"thumbnail_scale must be within [0.05, 2.0], got {self.thumbnail_scale}"
            )
        if self.font not in pdfmetrics.standardFonts:
            raise ConfigurationError(f"font must be one of the standard PDF fonts, got {self.font!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BinderSettings":
        known = {item.name: item for item in dataclasses.fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(f"Unknown setting(s): {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for name, value in data.items():
            values[name] = _coerce(name, value, known[name].type)
        return cls(**values)

    def merged(self, overrides: Mapping[str, Any]) -> "BinderSettings":
        current = dataclasses.asdict(self)
        current.update(overrides)
        return type(self).from_dict(current)


def _coerce(name: str, value: Any, annotation: Any) -> Any:
    # annotations are strings under postponed evaluation
    try:
        if annotation in ("float", float):
            return float(value)
        return str(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value for {name}: {value!r}") from exc


def settings_from_file(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the ``[pdfbinder]`` table of a TOML file."""
    config_path = Path(path).expanduser()
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {exc}") from exc

    table = data.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"[{CONFIG_TABLE}] in {config_path} must be a table")
    return table


def settings_from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect ``PDFBINDER_<FIELD>`` overrides from the environment."""
    environ = os.environ if environ is None else environ
    names = {item.name for item in dataclasses.fields(BinderSettings)}
    overrides: dict[str, Any] = {}
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()
        if name in names:
            overrides[name] = value
    return overrides


def load_settings(
    path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> BinderSettings:
    """Return settings built from defaults, an optional TOML file and the environment."""
    settings = BinderSettings()
    if path is not None:
        settings = settings.merged(settings_from_file(path))
        LOGGER.debug("Loaded settings from %s", path)
    env_overrides = settings_from_env(environ)
    if env_overrides:
        LOGGER.debug("Applying environment overrides: %s", sorted(env_overrides))
        settings = settings.merged(env_overrides)
    return settings


DEFAULT_SETTINGS = BinderSettings()


__all__ = [
    "BinderSettings",
    "DEFAULT_SETTINGS",
    "load_settings",
    "settings_from_env",
    "settings_from_file",
]
