"""
filename: gcloud_adc/models/credentials_file.py

Structural pydantic models for an Application Default Credentials document.

One flat CredentialsFile covers every credential kind. Only 'type' is
required; everything else is optional so a document can be parsed and
inspected even when the fields a later step needs are missing. Use
CredentialsFile.to_variant() for the typed, per-kind view.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from gcloud_adc.credentials.signing import load_rsa_signing_key
from gcloud_adc.errors import (
    AmbiguousCredentialSourceError,
    MissingCredentialFieldError,
    NoPrivateKeyFoundError,
)

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

    from gcloud_adc.models.credential_variants import CredentialVariant

SourceKind = Literal["file", "url", "executable", "metadata"]


class CredentialType(str, Enum):
    service_account = "service_account"
    authorized_user = "authorized_user"
    external_account = "external_account"
    impersonated_service_account = "impersonated_service_account"


class _Structural(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ServiceAccountImpersonationInfo(_Structural):
    token_lifetime_seconds: Optional[int] = None


class ExecutableConfig(_Structural):
    command: Optional[str] = None
    timeout_millis: Optional[int] = None
    output_file: Optional[str] = None


class Format(_Structural):
    """How to pull the subject token out of a response ("text" or "json")."""

    type: Optional[str] = None
    subject_token_field_name: Optional[str] = None


class CredentialSource(_Structural):
    """
    Where an external account obtains its subject token.

    Sub-configurations are told apart by which fields are present:
      - file: 'file'
      - url: 'url' (+ 'headers'), unless environment_id is set
      - executable: 'executable'
      - metadata: any of environment_id, region_url, regional_cred_verification_url,
        cred_verification_url, imdsv2_session_token_url
    A metadata source with environment_id also carries 'url' (the security
    credentials endpoint) and optional 'headers'; those belong to it.
    'format' may accompany file, url or metadata sources.
    """

    file: Optional[str] = None

    url: Optional[str] = None
    headers: Optional[Dict[str, str]] = None

    executable: Optional[ExecutableConfig] = None

    environment_id: Optional[str] = None
    region_url: Optional[str] = None
    regional_cred_verification_url: Optional[str] = None
    cred_verification_url: Optional[str] = None
    imdsv2_session_token_url: Optional[str] = None

    format: Optional[Format] = None

    def _has_metadata_fields(self) -> bool:
        return any(
            value is not None
            for value in (
                self.environment_id,
                self.region_url,
                self.regional_cred_verification_url,
                self.cred_verification_url,
                self.imdsv2_session_token_url,
            )
        )

    def populated_kinds(self) -> List[SourceKind]:
        """All sub-configurations present, in file, url, executable, metadata order."""
        kinds: List[SourceKind] = []
        if self.file is not None:
            kinds.append("file")
        if self.url is not None and self.environment_id is None:
            kinds.append("url")
        if self.executable is not None:
            kinds.append("executable")
        if self._has_metadata_fields():
            kinds.append("metadata")
        return kinds

    def source_kind(self) -> SourceKind:
        """
        Classify this source.

        Raises:
            AmbiguousCredentialSourceError: More than one sub-configuration is set.
            MissingCredentialFieldError: None is set.
        """
        kinds = self.populated_kinds()
        if len(kinds) > 1:
            raise AmbiguousCredentialSourceError(kinds)
        if not kinds:
            raise MissingCredentialFieldError(
                CredentialType.external_account.value,
                ["credential_source.file|url|executable|environment_id"],
            )
        return kinds[0]


class CredentialsFile(_Structural):
    """An Application Default Credentials document as found on disk or in the env."""

    type: StrictStr

    # Service account
    client_email: Optional[str] = None
    private_key_id: Optional[str] = None
    private_key: Optional[str] = Field(default=None, repr=False)
    auth_uri: Optional[str] = None
    token_uri: Optional[str] = None
    project_id: Optional[str] = None
    auth_provider_x509_cert_url: Optional[str] = None
    client_x509_cert_url: Optional[str] = None
    universe_domain: Optional[str] = None

    # Authorized user (typically written by `gcloud auth application-default login`)
    client_id: Optional[str] = None
    client_secret: Optional[str] = Field(default=None, repr=False)
    refresh_token: Optional[str] = Field(default=None, repr=False)

    # External account
    audience: Optional[str] = None
    subject_token_type: Optional[str] = None
    token_url: Optional[str] = None
    token_info_url: Optional[str] = None
    service_account_impersonation_url: Optional[str] = None
    service_account_impersonation: Optional[ServiceAccountImpersonationInfo] = None
    delegates: Optional[List[str]] = None
    credential_source: Optional[CredentialSource] = None
    workforce_pool_user_project: Optional[str] = None

    quota_project_id: Optional[str] = None

    @property
    def credential_type(self) -> Optional[CredentialType]:
        """The known CredentialType for 'type', or None for kinds we don't model."""
        try:
            return CredentialType(self.type)
        except ValueError:
            return None

    def try_to_private_key(self) -> RSAPrivateKey:
        """
        Decode 'private_key' into an RSA signing key.

        Returns:
            RSAPrivateKey: usable for RS256 signing.

        Raises:
            NoPrivateKeyFoundError: No 'private_key' in this document.
            InvalidPrivateKeyError: 'private_key' is not a PEM RSA private key.
        """
        if self.private_key is None:
            raise NoPrivateKeyFoundError(self.type)
        return load_rsa_signing_key(self.private_key)

    def to_variant(self) -> CredentialVariant:
        """Convert to the typed per-kind model. See gcloud_adc.models.credential_variants."""
        from gcloud_adc.models.credential_variants import to_variant

        return to_variant(self)

    def summary(self) -> Dict[str, Any]:
        """A dict safe to print: no private key, client secret or refresh token."""
        source_kind: Optional[str] = None
        if self.credential_source is not None:
            kinds = self.credential_source.populated_kinds()
            source_kind = "+".join(kinds) if kinds else None

        principal = self.client_email
        if principal is None and self.service_account_impersonation_url:
            from gcloud_adc.models.credential_variants import (
                principal_from_impersonation_url,
            )

            principal = principal_from_impersonation_url(
                self.service_account_impersonation_url
            )

        result: Dict[str, Any] = {
            "type": self.type,
            "project_id": self.project_id,
            "quota_project_id": self.quota_project_id,
            "principal": principal,
            "client_id": self.client_id,
            "audience": self.audience,
            "credential_source": source_kind,
            "has_private_key": self.private_key is not None,
        }
        return {k: v for k, v in result.items() if v is not None}


__all__ = [
    "CredentialType",
    "ServiceAccountImpersonationInfo",
    "ExecutableConfig",
    "Format",
    "CredentialSource",
    "CredentialsFile",
    "SourceKind",
]
