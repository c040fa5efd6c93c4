"""
gcloud_adc/credentials/parser.py

Parses credential document bytes into a CredentialsFile:
 - parse_credentials: bytes/str => CredentialsFile
 - load_credentials: resolve via the locator, then parse
 - load_credentials_from_file: read an explicit path, then parse

Only the 'type' field is checked here. Per-kind requirements are checked by
CredentialsFile.to_variant() and CredentialsFile.try_to_private_key().
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from pydantic import ValidationError

from gcloud_adc.credentials.locator import (
    locate_credentials_json,
    read_credentials_file,
)
from gcloud_adc.errors import MalformedDocumentError
from gcloud_adc.models.credentials_file import CredentialsFile
from gcloud_adc.models.settings import LocatorSettings
from gcloud_adc.utils.environment import CredentialEnvironment, SystemEnvironment

logger = logging.getLogger(__name__)


def parse_credentials(data: Union[bytes, str]) -> CredentialsFile:
    """Parse a JSON credentials document.

    Args:
        data (bytes | str): The JSON document.

    Returns:
        CredentialsFile: The parsed, immutable descriptor.

    Raises:
        MalformedDocumentError: If the data is not a JSON object, or its 'type'
            is missing or not a string, or a known field has the wrong type.
    """
    try:
        creds = CredentialsFile.model_validate_json(data)
    except ValidationError as e:
        raise MalformedDocumentError(f"Invalid credentials document: {e}") from e
    logger.debug("Parsed credentials of type %r", creds.type)
    return creds


async def load_credentials(
    environment: Optional[CredentialEnvironment] = None,
    settings: Optional[LocatorSettings] = None,
) -> CredentialsFile:
    """Locate Application Default Credentials and parse them."""
    data = await locate_credentials_json(environment, settings)
    return parse_credentials(data)


async def load_credentials_from_file(
    path: str, environment: Optional[CredentialEnvironment] = None
) -> CredentialsFile:
    """
    Parse the credentials file at 'path', ignoring the credential environment
    variables entirely.
    """
    data = await read_credentials_file(environment or SystemEnvironment(), path)
    return parse_credentials(data)


__all__ = ["parse_credentials", "load_credentials", "load_credentials_from_file"]
