"""
Shared fixtures: an in-memory CredentialEnvironment and generated RSA keys.
"""

from __future__ import annotations

import errno
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from gcloud_adc.utils.environment import CredentialEnvironment


class FakeEnvironment(CredentialEnvironment):
    """Env vars and files held in dicts; records every file read."""

    def __init__(
        self,
        env: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, bytes]] = None,
        home: Optional[Path] = Path("/home/tester"),
        windows: bool = False,
    ) -> None:
        self.env = dict(env or {})
        self.files = dict(files or {})
        self.home = home
        self.windows = windows
        self.reads: List[str] = []

    def get_var(self, name: str) -> Optional[str]:
        return self.env.get(name)

    async def read_file(self, path: str) -> bytes:
        self.reads.append(path)
        if path not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        return self.files[path]

    def home_dir(self) -> Optional[Path]:
        return self.home

    def is_windows(self) -> bool:
        return self.windows


@pytest.fixture
def fake_env() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture(scope="session")
def rsa_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def ec_pem() -> str:
    key = ec.generate_private_key(ec.SECP256R1())
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
