"""Layered key/value lookup: a .env overlay first, then the process environment."""
from __future__ import annotations
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values

from s3check.logging_config import get_logger

DEFAULT_ENV_FILE = ".env"

logger = get_logger(__name__)


class EnvSource(Protocol):
    name: str

    def get(self, key: str) -> str | None: ...


class DotenvSource:
    """Values parsed from a .env file. A missing file behaves like an empty one."""

    def __init__(self, path: str | Path = DEFAULT_ENV_FILE):
        self.path = Path(path)
        self.name = f"dotenv:{self.path}"
        if self.path.is_file():
            self._values = dotenv_values(self.path)
            logger.debug("Loaded env file: path=%s keys=%s", self.path, len(self._values))
        else:
            self._values = {}
            logger.debug("Env file not found, skipping: path=%s", self.path)

    def get(self, key: str) -> str | None:
        return self._values.get(key)


class ProcessEnvSource:
    name = "environ"

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> str | None:
        return self._environ.get(key)


class LayeredEnv:
    def __init__(self, sources: Iterable[EnvSource]):
        self.sources = list(sources)

    def get(self, key: str, default: str | None = None) -> str | None:
        for source in self.sources:
            value = source.get(key)
            if value is not None and value.strip():
                return value.strip()
        return default


def default_sources(env_file: str | Path = DEFAULT_ENV_FILE) -> LayeredEnv:
    return LayeredEnv([DotenvSource(env_file), ProcessEnvSource()])
