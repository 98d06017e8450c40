"""
Decoder configuration.

Values come from the environment, after ``load_dotenv()`` has merged the
nearest ``.env`` file above the working directory:

    SAV                    default save file path
    SAVE_DECRYPT_KEY       cipher key override (ASCII)
    SAVE_WRITE_DECRYPTED   1/true/yes to write <save>.decrypt next to the save
    SAVE_LOG_LEVEL         logging level name
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .cipher import ENCRYPTION_KEY


ENV_SAVE_PATH = "SAV"
ENV_KEY = "SAVE_DECRYPT_KEY"
ENV_WRITE_DECRYPTED = "SAVE_WRITE_DECRYPTED"
ENV_LOG_LEVEL = "SAVE_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass
class DecoderConfig:
    """Configuration for reading and decoding save files."""

    save_path: Optional[Path] = None
    key: bytes = ENCRYPTION_KEY
    write_decrypted: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.key:
            raise ValueError("cipher key must not be empty")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"unknown log level: {self.log_level}")
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 dotenv: bool = True) -> "DecoderConfig":
        """Build a config from environment variables (and ``.env``)."""
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        raw_path = environ.get(ENV_SAVE_PATH)
        raw_key = environ.get(ENV_KEY)
        if raw_key is not None and not raw_key:
            raise ValueError(f"{ENV_KEY} is set but empty")

        return cls(
            save_path=Path(raw_path) if raw_path else None,
            key=raw_key.encode("ascii") if raw_key else ENCRYPTION_KEY,
            write_decrypted=_parse_flag(ENV_WRITE_DECRYPTED, environ.get(ENV_WRITE_DECRYPTED, "")),
            log_level=environ.get(ENV_LOG_LEVEL, "INFO"),
        )


def _parse_flag(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")
