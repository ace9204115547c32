"""Runtime settings for docxedit, overridable from the environment."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from docxedit.errors import ConfigError

ENV_PREFIX = "DOCXEDIT_"


@dataclass(frozen=True)
class Settings:
    """Editor and packing settings.

    Attributes:
        debounce_seconds: Quiet period after the last edit before validating
        large_entry_threshold: Content length (characters) above which a host
            should show a loading indicator
        compression_level: DEFLATE level used when packing (0-9)
        output_suffix: Appended to the original stem when saving
    """

    debounce_seconds: float = 0.5
    large_entry_threshold: int = 100_000
    compression_level: int = 9
    output_suffix: str = "_modified"

    def __post_init__(self) -> None:
        if self.debounce_seconds < 0:
            raise ConfigError("debounce_seconds must not be negative")
        if self.large_entry_threshold < 0:
            raise ConfigError("large_entry_threshold must not be negative")
        if not 0 <= self.compression_level <= 9:
            raise ConfigError("compression_level must be between 0 and 9")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from DOCXEDIT_* variables, falling back to defaults."""
        env = os.environ if env is None else env
        overrides = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            overrides[f.name] = _coerce(f.name, raw.strip(), type(getattr(cls, f.name)))
        return cls(**overrides)


def _coerce(name: str, raw: str, kind: type) -> object:
    if kind is str:
        return raw
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from exc


def load_settings(dotenv_path: Path | str | None = None) -> Settings:
    """Load a .env file (if present) and return settings from the environment."""
    if dotenv_path is not None:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()
    return Settings.from_env()
