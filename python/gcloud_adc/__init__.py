"""
gcloud_adc

Locate, parse and inspect Google Cloud Application Default Credentials.

Aggregate imports so the common entry points can be used directly:

    creds = await load_credentials()
    variant = creds.to_variant()
    key = creds.try_to_private_key()
"""

from gcloud_adc.credentials.locator import (
    locate_credentials_json,
    well_known_credentials_path,
)
from gcloud_adc.credentials.parser import (
    load_credentials,
    load_credentials_from_file,
    parse_credentials,
)
from gcloud_adc.credentials.project import resolve_project_id
from gcloud_adc.credentials.signing import load_rsa_signing_key
from gcloud_adc.errors import (
    AmbiguousCredentialSourceError,
    CredentialsError,
    CredentialsIOError,
    EnvironmentAccessError,
    InvalidPrivateKeyError,
    MalformedDocumentError,
    MissingCredentialFieldError,
    NoHomeDirectoryError,
    NoPrivateKeyFoundError,
    UnsupportedCredentialTypeError,
)
from gcloud_adc.models.credential_variants import (
    AuthorizedUserCredentials,
    ExecutableCredentialSource,
    ExternalAccountCredentials,
    FileCredentialSource,
    MetadataCredentialSource,
    ServiceAccountCredentials,
    UrlCredentialSource,
)
from gcloud_adc.models.credentials_file import (
    CredentialSource,
    CredentialsFile,
    CredentialType,
)
from gcloud_adc.models.settings import LocatorSettings
from gcloud_adc.utils.environment import CredentialEnvironment, SystemEnvironment

__all__ = [
    "locate_credentials_json",
    "well_known_credentials_path",
    "load_credentials",
    "load_credentials_from_file",
    "parse_credentials",
    "resolve_project_id",
    "load_rsa_signing_key",
    "AmbiguousCredentialSourceError",
    "CredentialsError",
    "CredentialsIOError",
    "EnvironmentAccessError",
    "InvalidPrivateKeyError",
    "MalformedDocumentError",
    "MissingCredentialFieldError",
    "NoHomeDirectoryError",
    "NoPrivateKeyFoundError",
    "UnsupportedCredentialTypeError",
    "AuthorizedUserCredentials",
    "ExecutableCredentialSource",
    "ExternalAccountCredentials",
    "FileCredentialSource",
    "MetadataCredentialSource",
    "ServiceAccountCredentials",
    "UrlCredentialSource",
    "CredentialSource",
    "CredentialsFile",
    "CredentialType",
    "LocatorSettings",
    "CredentialEnvironment",
    "SystemEnvironment",
]
