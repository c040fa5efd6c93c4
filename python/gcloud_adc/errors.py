"""
gcloud_adc/errors.py

Exception hierarchy for credential resolution, parsing and key extraction.

Callers can tell "not configured" apart from "configured but broken":
 - EnvironmentAccessError / NoHomeDirectoryError => nothing to read
 - CredentialsIOError => a configured or computed path could not be read
 - MalformedDocumentError => the bytes are not a credentials document
 - NoPrivateKeyFoundError vs InvalidPrivateKeyError => kind mismatch vs corrupt key
"""

from __future__ import annotations

from typing import Optional, Sequence


class CredentialsError(Exception):
    """Base class for every error raised by gcloud_adc."""


class EnvironmentAccessError(CredentialsError):
    """A required environment variable is not set."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"Environment variable '{variable}' is not set.")
        self.variable = variable


class NoHomeDirectoryError(CredentialsError):
    """The home directory could not be determined."""

    def __init__(self) -> None:
        super().__init__(
            "Could not determine the home directory to locate default credentials."
        )


class CredentialsIOError(CredentialsError):
    """Reading a credentials file failed. The OSError is chained as __cause__."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not read credentials file '{path}': {reason}")
        self.path = path
        self.reason = reason


class MalformedDocumentError(CredentialsError, ValueError):
    """The credentials document is not valid JSON or lacks the 'type' field."""


class NoPrivateKeyFoundError(CredentialsError):
    """Signing key requested from credentials that carry no private key."""

    def __init__(self, credential_type: Optional[str] = None) -> None:
        detail = f" (type '{credential_type}')" if credential_type else ""
        super().__init__(f"No private key found in credentials{detail}.")
        self.credential_type = credential_type


class InvalidPrivateKeyError(CredentialsError, ValueError):
    """The private key field is present but is not a PEM RSA private key."""


class MissingCredentialFieldError(CredentialsError, ValueError):
    """A field needed for the requested credential kind is absent."""

    def __init__(self, credential_type: str, fields: Sequence[str]) -> None:
        joined = ", ".join(fields)
        super().__init__(
            f"Credentials of type '{credential_type}' are missing required field(s): {joined}"
        )
        self.credential_type = credential_type
        self.fields = list(fields)


class AmbiguousCredentialSourceError(CredentialsError, ValueError):
    """More than one credential_source sub-configuration is populated."""

    def __init__(self, kinds: Sequence[str]) -> None:
        super().__init__(
            "credential_source must configure exactly one of file, url, executable "
            f"or metadata; found: {', '.join(kinds)}"
        )
        self.kinds = list(kinds)


class UnsupportedCredentialTypeError(CredentialsError, ValueError):
    """The document's 'type' has no typed variant."""

    def __init__(self, credential_type: str) -> None:
        super().__init__(f"Unsupported credential type '{credential_type}'.")
        self.credential_type = credential_type


__all__ = [
    "CredentialsError",
    "EnvironmentAccessError",
    "NoHomeDirectoryError",
    "CredentialsIOError",
    "MalformedDocumentError",
    "NoPrivateKeyFoundError",
    "InvalidPrivateKeyError",
    "MissingCredentialFieldError",
    "AmbiguousCredentialSourceError",
    "UnsupportedCredentialTypeError",
]
