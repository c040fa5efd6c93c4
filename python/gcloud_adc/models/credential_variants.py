"""
gcloud_adc/models/credential_variants.py

Typed, per-kind views of a CredentialsFile.

CredentialsFile keeps every field optional so parsing is tolerant. Code that
actually issues tokens wants the opposite: one model per credential kind with
that kind's required fields guaranteed present. to_variant() performs that
validating conversion. Each model carries a Literal 'kind' so callers can
dispatch exhaustively:

    match credentials.to_variant():
        case ServiceAccountCredentials() as sa: ...
        case AuthorizedUserCredentials() as user: ...
        case ExternalAccountCredentials(credential_source=FileCredentialSource()): ...
"""

from __future__ import annotations

import re
from typing import Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from gcloud_adc.errors import (
    MissingCredentialFieldError,
    UnsupportedCredentialTypeError,
)
from gcloud_adc.models.credentials_file import (
    CredentialSource,
    CredentialsFile,
    CredentialType,
    Format,
)

_IMPERSONATION_URL_RE = re.compile(r"/serviceAccounts/([^/:]+):generateAccessToken$")
_WORKFORCE_AUDIENCE_RE = re.compile(
    r"^//iam\.googleapis\.com/locations/[^/]+/workforcePools/"
)


class _Variant(BaseModel):
    model_config = ConfigDict(frozen=True)


class SubjectTokenFormat(_Variant):
    type: str
    subject_token_field_name: Optional[str] = None


class FileCredentialSource(_Variant):
    kind: Literal["file"] = "file"
    path: str
    format: Optional[SubjectTokenFormat] = None


class UrlCredentialSource(_Variant):
    kind: Literal["url"] = "url"
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    format: Optional[SubjectTokenFormat] = None


class ExecutableCredentialSource(_Variant):
    kind: Literal["executable"] = "executable"
    command: str
    output_file: str
    # Honored by whatever runs the executable, not here.
    timeout_millis: Optional[int] = None


class MetadataCredentialSource(_Variant):
    """A cloud metadata (IMDS style) subject token source."""

    kind: Literal["metadata"] = "metadata"
    environment_id: str
    url: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    region_url: Optional[str] = None
    regional_cred_verification_url: Optional[str] = None
    cred_verification_url: Optional[str] = None
    imdsv2_session_token_url: Optional[str] = None
    format: Optional[SubjectTokenFormat] = None


SubjectTokenSource = Annotated[
    Union[
        FileCredentialSource,
        UrlCredentialSource,
        ExecutableCredentialSource,
        MetadataCredentialSource,
    ],
    Field(discriminator="kind"),
]


class ServiceAccountCredentials(_Variant):
    kind: Literal["service_account"] = "service_account"
    client_email: str
    private_key: str = Field(repr=False)
    token_uri: str
    private_key_id: Optional[str] = None
    auth_uri: Optional[str] = None
    project_id: Optional[str] = None
    universe_domain: Optional[str] = None
    quota_project_id: Optional[str] = None


class AuthorizedUserCredentials(_Variant):
    kind: Literal["authorized_user"] = "authorized_user"
    client_id: str
    client_secret: str = Field(repr=False)
    refresh_token: str = Field(repr=False)
    quota_project_id: Optional[str] = None


class ExternalAccountCredentials(_Variant):
    kind: Literal["external_account"] = "external_account"
    audience: str
    subject_token_type: str
    token_url: str
    credential_source: SubjectTokenSource
    token_info_url: Optional[str] = None
    service_account_impersonation_url: Optional[str] = None
    token_lifetime_seconds: Optional[int] = None
    delegates: Tuple[str, ...] = ()
    quota_project_id: Optional[str] = None
    workforce_pool_user_project: Optional[str] = None

    @property
    def impersonated_principal(self) -> Optional[str]:
        if self.service_account_impersonation_url is None:
            return None
        return principal_from_impersonation_url(self.service_account_impersonation_url)

    @property
    def is_workforce_pool(self) -> bool:
        return bool(_WORKFORCE_AUDIENCE_RE.match(self.audience))


CredentialVariant = Annotated[
    Union[
        ServiceAccountCredentials,
        AuthorizedUserCredentials,
        ExternalAccountCredentials,
    ],
    Field(discriminator="kind"),
]


def principal_from_impersonation_url(url: str) -> Optional[str]:
    """
    Extract the target service account email from an impersonation URL such as
    https://iamcredentials.googleapis.com/v1/projects/-/serviceAccounts/sa@p.iam.gserviceaccount.com:generateAccessToken
    """
    match = _IMPERSONATION_URL_RE.search(url)
    return match.group(1) if match else None


def _require(credential_type: str, **values: Optional[object]) -> None:
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise MissingCredentialFieldError(credential_type, missing)


def _convert_format(fmt: Optional[Format]) -> Optional[SubjectTokenFormat]:
    if fmt is None:
        return None
    _require(CredentialType.external_account.value, **{"format.type": fmt.type})
    if fmt.type == "json":
        _require(
            CredentialType.external_account.value,
            **{"format.subject_token_field_name": fmt.subject_token_field_name},
        )
    return SubjectTokenFormat.model_validate(fmt.model_dump())


def convert_credential_source(
    source: CredentialSource,
) -> Union[
    FileCredentialSource,
    UrlCredentialSource,
    ExecutableCredentialSource,
    MetadataCredentialSource,
]:
    """
    Convert the structural credential_source into its single typed variant.

    Raises:
        AmbiguousCredentialSourceError: More than one of file/url/executable/metadata.
        MissingCredentialFieldError: None of them, or a required sub-field is absent.
    """
    kind = source.source_kind()

    if kind == "file":
        assert source.file is not None
        return FileCredentialSource(
            path=source.file, format=_convert_format(source.format)
        )

    if kind == "url":
        assert source.url is not None
        return UrlCredentialSource(
            url=source.url,
            headers=dict(source.headers or {}),
            format=_convert_format(source.format),
        )

    if kind == "executable":
        assert source.executable is not None
        executable = source.executable
        _require(
            CredentialType.external_account.value,
            **{
                "credential_source.executable.command": executable.command,
                "credential_source.executable.output_file": executable.output_file,
            },
        )
        assert executable.command is not None and executable.output_file is not None
        return ExecutableCredentialSource(
            command=executable.command,
            output_file=executable.output_file,
            timeout_millis=executable.timeout_millis,
        )

    _require(
        CredentialType.external_account.value,
        **{"credential_source.environment_id": source.environment_id},
    )
    assert source.environment_id is not None
    return MetadataCredentialSource(
        environment_id=source.environment_id,
        url=source.url,
        headers=dict(source.headers or {}),
        region_url=source.region_url,
        regional_cred_verification_url=source.regional_cred_verification_url,
        cred_verification_url=source.cred_verification_url,
        imdsv2_session_token_url=source.imdsv2_session_token_url,
        format=_convert_format(source.format),
    )


def _service_account(creds: CredentialsFile) -> ServiceAccountCredentials:
    _require(
        creds.type,
        client_email=creds.client_email,
        private_key=creds.private_key,
        token_uri=creds.token_uri,
    )
    assert creds.client_email is not None and creds.private_key is not None
    assert creds.token_uri is not None
    return ServiceAccountCredentials(
        client_email=creds.client_email,
        private_key=creds.private_key,
        token_uri=creds.token_uri,
        private_key_id=creds.private_key_id,
        auth_uri=creds.auth_uri,
        project_id=creds.project_id,
        universe_domain=creds.universe_domain,
        quota_project_id=creds.quota_project_id,
    )


def _authorized_user(creds: CredentialsFile) -> AuthorizedUserCredentials:
    _require(
        creds.type,
        client_id=creds.client_id,
        client_secret=creds.client_secret,
        refresh_token=creds.refresh_token,
    )
    assert creds.client_id is not None and creds.client_secret is not None
    assert creds.refresh_token is not None
    return AuthorizedUserCredentials(
        client_id=creds.client_id,
        client_secret=creds.client_secret,
        refresh_token=creds.refresh_token,
        quota_project_id=creds.quota_project_id,
    )


def _external_account(creds: CredentialsFile) -> ExternalAccountCredentials:
    _require(
        creds.type,
        audience=creds.audience,
        subject_token_type=creds.subject_token_type,
        token_url=creds.token_url,
        credential_source=creds.credential_source,
    )
    assert creds.audience is not None and creds.subject_token_type is not None
    assert creds.token_url is not None
    assert creds.credential_source is not None

    lifetime = (
        creds.service_account_impersonation.token_lifetime_seconds
        if creds.service_account_impersonation is not None
        else None
    )
    return ExternalAccountCredentials(
        audience=creds.audience,
        subject_token_type=creds.subject_token_type,
        token_url=creds.token_url,
        credential_source=convert_credential_source(creds.credential_source),
        token_info_url=creds.token_info_url,
        service_account_impersonation_url=creds.service_account_impersonation_url,
        token_lifetime_seconds=lifetime,
        delegates=tuple(creds.delegates or ()),
        quota_project_id=creds.quota_project_id,
        workforce_pool_user_project=creds.workforce_pool_user_project,
    )


_CONVERTERS = {
    CredentialType.service_account: _service_account,
    CredentialType.authorized_user: _authorized_user,
    CredentialType.external_account: _external_account,
}


def to_variant(
    creds: CredentialsFile,
) -> Union[
    ServiceAccountCredentials, AuthorizedUserCredentials, ExternalAccountCredentials
]:
    """
    Validate a CredentialsFile against the requirements of its 'type'.

    Raises:
        UnsupportedCredentialTypeError: 'type' has no typed variant.
        MissingCredentialFieldError: A field the kind requires is absent.
        AmbiguousCredentialSourceError: An external account's source is ambiguous.
    """
    credential_type = creds.credential_type
    if credential_type is None or credential_type not in _CONVERTERS:
        raise UnsupportedCredentialTypeError(creds.type)
    return _CONVERTERS[credential_type](creds)


__all__ = [
    "SubjectTokenFormat",
    "FileCredentialSource",
    "UrlCredentialSource",
    "ExecutableCredentialSource",
    "MetadataCredentialSource",
    "SubjectTokenSource",
    "ServiceAccountCredentials",
    "AuthorizedUserCredentials",
    "ExternalAccountCredentials",
    "CredentialVariant",
    "convert_credential_source",
    "principal_from_impersonation_url",
    "to_variant",
]
