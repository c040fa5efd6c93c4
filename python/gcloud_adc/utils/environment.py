"""
gcloud_adc/utils/environment.py

The ambient state credential resolution reads: environment variables, files,
the home directory and the platform family. Resolution takes a
CredentialEnvironment so tests can substitute a fake instead of mutating the
real process environment.
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import aiofiles


class CredentialEnvironment(ABC):
    """Read-only view of process environment, filesystem and platform."""

    @abstractmethod
    def get_var(self, name: str) -> Optional[str]:
        """Return the variable's value, or None if it is unset."""

    @abstractmethod
    async def read_file(self, path: str) -> bytes:
        """Return a file's full contents. Raises OSError on failure."""

    @abstractmethod
    def home_dir(self) -> Optional[Path]:
        """Return the current user's home directory, or None if unknown."""

    @abstractmethod
    def is_windows(self) -> bool:
        """True on the Windows platform family."""


class SystemEnvironment(CredentialEnvironment):
    """CredentialEnvironment backed by os.environ, aiofiles and Path.home()."""

    def get_var(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    async def read_file(self, path: str) -> bytes:
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    def home_dir(self) -> Optional[Path]:
        try:
            return Path.home()
        except (RuntimeError, KeyError):
            # Path.home() raises when neither HOME nor the passwd entry exist
            return None

    def is_windows(self) -> bool:
        return sys.platform.startswith("win")


__all__ = ["CredentialEnvironment", "SystemEnvironment"]
