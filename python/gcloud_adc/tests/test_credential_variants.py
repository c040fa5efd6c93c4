"""Tests for converting CredentialsFile into typed per-kind variants."""

from __future__ import annotations

import json

import pytest

from gcloud_adc.credentials.parser import parse_credentials
from gcloud_adc.errors import (
    AmbiguousCredentialSourceError,
    MissingCredentialFieldError,
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
    principal_from_impersonation_url,
)
from gcloud_adc.models.credentials_file import CredentialsFile

_EXTERNAL_BASE = {
    "type": "external_account",
    "audience": "//iam.googleapis.com/projects/1/locations/global/workloadIdentityPools/p/providers/x",
    "subject_token_type": "urn:ietf:params:oauth:token-type:jwt",
    "token_url": "https://sts.googleapis.com/v1/token",
}


def _external(**credential_source: object) -> CredentialsFile:
    return CredentialsFile.model_validate(
        {**_EXTERNAL_BASE, "credential_source": credential_source}
    )


def test_service_account_variant() -> None:
    creds = CredentialsFile(
        type="service_account",
        client_email="sa@p.iam.gserviceaccount.com",
        private_key="pem",
        token_uri="https://oauth2.googleapis.com/token",
        project_id="p",
    )
    variant = creds.to_variant()
    assert isinstance(variant, ServiceAccountCredentials)
    assert variant.kind == "service_account"
    assert variant.project_id == "p"


def test_service_account_missing_fields_are_named() -> None:
    creds = CredentialsFile(type="service_account", client_email="sa@p")
    with pytest.raises(MissingCredentialFieldError) as excinfo:
        creds.to_variant()
    assert excinfo.value.fields == ["private_key", "token_uri"]
    assert excinfo.value.credential_type == "service_account"


def test_authorized_user_variant() -> None:
    creds = CredentialsFile(
        type="authorized_user",
        client_id="cid",
        client_secret="secret",
        refresh_token="refresh",
        quota_project_id="quota",
    )
    variant = creds.to_variant()
    assert isinstance(variant, AuthorizedUserCredentials)
    assert variant.quota_project_id == "quota"


def test_unknown_type_has_no_variant() -> None:
    with pytest.raises(UnsupportedCredentialTypeError):
        CredentialsFile(type="gdch_service_account").to_variant()


def test_file_source() -> None:
    variant = _external(file="/token", format={"type": "text"}).to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    assert isinstance(variant.credential_source, FileCredentialSource)
    assert variant.credential_source.path == "/token"
    assert variant.credential_source.format is not None
    assert variant.credential_source.format.type == "text"


def test_url_source_with_headers_and_json_format() -> None:
    variant = _external(
        url="http://localhost:5000/token",
        headers={"Metadata-Flavor": "Google"},
        format={"type": "json", "subject_token_field_name": "id_token"},
    ).to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    source = variant.credential_source
    assert isinstance(source, UrlCredentialSource)
    assert source.headers == {"Metadata-Flavor": "Google"}
    assert source.format is not None
    assert source.format.subject_token_field_name == "id_token"


def test_json_format_requires_field_name() -> None:
    creds = _external(file="/token", format={"type": "json"})
    with pytest.raises(MissingCredentialFieldError) as excinfo:
        creds.to_variant()
    assert excinfo.value.fields == ["format.subject_token_field_name"]


def test_executable_source() -> None:
    variant = _external(
        executable={
            "command": "/usr/bin/fetch-token --aud x",
            "timeout_millis": 5000,
            "output_file": "/tmp/token-cache.json",
        }
    ).to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    source = variant.credential_source
    assert isinstance(source, ExecutableCredentialSource)
    assert source.timeout_millis == 5000
    assert source.output_file == "/tmp/token-cache.json"


def test_executable_source_requires_command() -> None:
    with pytest.raises(MissingCredentialFieldError):
        _external(executable={"output_file": "/tmp/out"}).to_variant()


def test_metadata_source() -> None:
    variant = _external(
        environment_id="aws1",
        region_url="http://169.254.169.254/latest/meta-data/placement/availability-zone",
        regional_cred_verification_url=(
            "https://sts.{region}.amazonaws.com?Action=GetCallerIdentity&Version=2011-06-15"
        ),
        imdsv2_session_token_url="http://169.254.169.254/latest/api/token",
    ).to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    source = variant.credential_source
    assert isinstance(source, MetadataCredentialSource)
    assert source.environment_id == "aws1"
    assert source.cred_verification_url is None


def test_metadata_source_requires_environment_id() -> None:
    with pytest.raises(MissingCredentialFieldError):
        _external(region_url="http://169.254.169.254/region").to_variant()


def test_ambiguous_source_is_rejected_but_parses() -> None:
    creds = _external(file="/token", url="http://localhost/token")
    assert creds.credential_source is not None
    assert creds.credential_source.populated_kinds() == ["file", "url"]
    with pytest.raises(AmbiguousCredentialSourceError) as excinfo:
        creds.to_variant()
    assert excinfo.value.kinds == ["file", "url"]


def test_empty_source_is_rejected() -> None:
    with pytest.raises(MissingCredentialFieldError):
        _external().to_variant()


def test_external_account_requires_credential_source() -> None:
    creds = CredentialsFile.model_validate(_EXTERNAL_BASE)
    with pytest.raises(MissingCredentialFieldError) as excinfo:
        creds.to_variant()
    assert excinfo.value.fields == ["credential_source"]


def test_impersonation_and_delegates() -> None:
    creds = CredentialsFile.model_validate(
        {
            **_EXTERNAL_BASE,
            "credential_source": {"file": "/token"},
            "service_account_impersonation_url": (
                "https://iamcredentials.googleapis.com/v1/projects/-/serviceAccounts/"
                "target@p.iam.gserviceaccount.com:generateAccessToken"
            ),
            "service_account_impersonation": {"token_lifetime_seconds": 600},
            "delegates": ["d1@p.iam.gserviceaccount.com"],
        }
    )
    variant = creds.to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    assert variant.impersonated_principal == "target@p.iam.gserviceaccount.com"
    assert variant.token_lifetime_seconds == 600
    assert variant.delegates == ("d1@p.iam.gserviceaccount.com",)
    assert not variant.is_workforce_pool


def test_workforce_pool_audience() -> None:
    creds = CredentialsFile.model_validate(
        {
            **_EXTERNAL_BASE,
            "audience": "//iam.googleapis.com/locations/global/workforcePools/wf/providers/p",
            "workforce_pool_user_project": "user-proj",
            "credential_source": {"file": "/token"},
        }
    )
    variant = creds.to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    assert variant.is_workforce_pool
    assert variant.workforce_pool_user_project == "user-proj"
    assert variant.impersonated_principal is None


@pytest.mark.parametrize(
    "url, expected",
    [
        (
            "https://iamcredentials.googleapis.com/v1/projects/-/serviceAccounts/"
            "x@y.iam.gserviceaccount.com:generateAccessToken",
            "x@y.iam.gserviceaccount.com",
        ),
        ("https://example.com/not-an-impersonation-url", None),
    ],
)
def test_principal_from_impersonation_url(url: str, expected: object) -> None:
    assert principal_from_impersonation_url(url) == expected


_AWS_SOURCE = {
    "environment_id": "aws1",
    "region_url": "http://169.254.169.254/latest/meta-data/placement/availability-zone",
    "url": "http://169.254.169.254/latest/meta-data/iam/security-credentials",
    "regional_cred_verification_url": (
        "https://sts.{region}.amazonaws.com?Action=GetCallerIdentity&Version=2011-06-15"
    ),
    "imdsv2_session_token_url": "http://169.254.169.254/latest/api/token",
}


def test_aws_source_keeps_security_credentials_url() -> None:
    creds = parse_credentials(
        json.dumps(
            {
                **_EXTERNAL_BASE,
                "subject_token_type": "urn:ietf:params:aws:token-type:aws4_request",
                "credential_source": {
                    **_AWS_SOURCE,
                    "headers": {"X-Extra": "1"},
                },
            }
        )
    )
    assert creds.credential_source is not None
    assert creds.credential_source.populated_kinds() == ["metadata"]
    assert creds.summary()["credential_source"] == "metadata"

    variant = creds.to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    source = variant.credential_source
    assert isinstance(source, MetadataCredentialSource)
    assert source.url == _AWS_SOURCE["url"]
    assert source.headers == {"X-Extra": "1"}
    assert source.region_url == _AWS_SOURCE["region_url"]
    assert source.imdsv2_session_token_url == _AWS_SOURCE["imdsv2_session_token_url"]


def test_url_with_metadata_fields_but_no_environment_id_is_ambiguous() -> None:
    creds = _external(url="http://localhost/token", region_url="http://region")
    with pytest.raises(AmbiguousCredentialSourceError) as excinfo:
        creds.to_variant()
    assert excinfo.value.kinds == ["url", "metadata"]


def test_file_with_environment_id_is_still_ambiguous() -> None:
    with pytest.raises(AmbiguousCredentialSourceError):
        _external(file="/token", environment_id="aws1").to_variant()


def test_executable_source_ignores_format() -> None:
    variant = _external(
        executable={"command": "/bin/token", "output_file": "/tmp/out"},
        format={},
    ).to_variant()
    assert isinstance(variant, ExternalAccountCredentials)
    assert isinstance(variant.credential_source, ExecutableCredentialSource)
