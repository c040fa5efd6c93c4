"""
gcloud_adc/credentials/locator.py

Finds the bytes of the Application Default Credentials document.

Precedence, first hit wins:
 1) GOOGLE_APPLICATION_CREDENTIALS_JSON - the document itself, raw or base64.
 2) GOOGLE_APPLICATION_CREDENTIALS - a path to the document.
 3) The gcloud well-known file, only when (2) is unset:
      Windows: %APPDATA%/gcloud/application_default_credentials.json
      others:  ~/.config/gcloud/application_default_credentials.json

Nothing is cached; every call re-reads the environment and the file.
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path, PureWindowsPath
from typing import Optional, Union

from gcloud_adc.errors import (
    CredentialsIOError,
    EnvironmentAccessError,
    NoHomeDirectoryError,
)
from gcloud_adc.models.settings import LocatorSettings
from gcloud_adc.utils.environment import CredentialEnvironment, SystemEnvironment

logger = logging.getLogger(__name__)


def _decode_inline(value: str) -> bytes:
    """Standard base64 if the value is valid base64, otherwise the raw value."""
    raw = value.encode("utf-8", errors="surrogateescape")
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        return raw


def json_from_env(
    environment: CredentialEnvironment, settings: LocatorSettings
) -> Optional[bytes]:
    """
    Return the inline document, or None if the inline variable is unset.
    """
    value = environment.get_var(settings.json_env_var)
    if value is None:
        return None
    logger.debug("Using inline credentials from $%s", settings.json_env_var)
    return _decode_inline(value)


def well_known_credentials_path(
    environment: Optional[CredentialEnvironment] = None,
    settings: Optional[LocatorSettings] = None,
) -> Union[Path, PureWindowsPath]:
    """
    The gcloud well-known credentials file for this platform.

    Raises:
        EnvironmentAccessError: On Windows, if APPDATA is unset.
        NoHomeDirectoryError: Elsewhere, if the home directory is unknown.
    """
    env = environment or SystemEnvironment()
    cfg = settings or LocatorSettings()

    if env.is_windows():
        app_data = env.get_var(cfg.appdata_env_var)
        if app_data is None:
            raise EnvironmentAccessError(cfg.appdata_env_var)
        return PureWindowsPath(app_data).joinpath(
            *cfg.windows_config_dirs, cfg.credentials_file_name
        )

    home = env.home_dir()
    if home is None:
        raise NoHomeDirectoryError()
    return home.joinpath(*cfg.unix_config_dirs, cfg.credentials_file_name)


async def read_credentials_file(environment: CredentialEnvironment, path: str) -> bytes:
    """Read a credentials file; OSError or an unusable path => CredentialsIOError."""
    try:
        data = await environment.read_file(path)
    except OSError as e:
        raise CredentialsIOError(path, e.strerror or str(e)) from e
    except ValueError as e:
        # unusable path, e.g. an embedded null byte
        raise CredentialsIOError(path, str(e)) from e
    logger.debug("Read %d bytes of credentials from %s", len(data), path)
    return data


async def json_from_file(
    environment: CredentialEnvironment, settings: LocatorSettings
) -> bytes:
    """
    Read the document from $GOOGLE_APPLICATION_CREDENTIALS, or from the
    well-known path if that variable is unset. A set but unreadable path is an
    error, never a reason to fall back.
    """
    configured = environment.get_var(settings.path_env_var)
    if configured is not None:
        logger.debug("Using credentials file from $%s", settings.path_env_var)
        return await read_credentials_file(environment, configured)

    path = well_known_credentials_path(environment, settings)
    logger.debug("Using well-known credentials file %s", path)
    return await read_credentials_file(environment, str(path))


async def locate_credentials_json(
    environment: Optional[CredentialEnvironment] = None,
    settings: Optional[LocatorSettings] = None,
) -> bytes:
    """Resolve the credentials document bytes from the environment.

    Args:
        environment (CredentialEnvironment, optional): Source of env vars, files
            and the home directory. Defaults to the running process.
        settings (LocatorSettings, optional): Variable and file names to use.

    Returns:
        bytes: The (possibly base64-decoded) document.

    Raises:
        EnvironmentAccessError: Windows fallback without APPDATA.
        NoHomeDirectoryError: Fallback without a home directory.
        CredentialsIOError: The configured or well-known file could not be read.
    """
    env = environment or SystemEnvironment()
    cfg = settings or LocatorSettings()

    inline = json_from_env(env, cfg)
    if inline is not None:
        return inline
    return await json_from_file(env, cfg)


__all__ = [
    "json_from_env",
    "json_from_file",
    "locate_credentials_json",
    "read_credentials_file",
    "well_known_credentials_path",
]
