"""Tests for default project resolution."""

from __future__ import annotations

from conftest import FakeEnvironment
from gcloud_adc.credentials.project import resolve_project_id
from gcloud_adc.models.credentials_file import CredentialsFile


def test_env_var_wins() -> None:
    env = FakeEnvironment(
        env={"GOOGLE_CLOUD_PROJECT": "from-env", "GCLOUD_PROJECT": "legacy"}
    )
    creds = CredentialsFile(type="service_account", project_id="from-file")
    assert resolve_project_id(creds, env) == "from-env"


def test_legacy_env_var() -> None:
    env = FakeEnvironment(env={"GOOGLE_CLOUD_PROJECT": "", "GCLOUD_PROJECT": "legacy"})
    assert resolve_project_id(None, env) == "legacy"


def test_project_id_then_quota_project() -> None:
    env = FakeEnvironment()
    assert (
        resolve_project_id(
            CredentialsFile(type="service_account", project_id="p", quota_project_id="q"),
            env,
        )
        == "p"
    )
    assert (
        resolve_project_id(
            CredentialsFile(type="authorized_user", quota_project_id="q"), env
        )
        == "q"
    )


def test_nothing_found() -> None:
    assert resolve_project_id(CredentialsFile(type="authorized_user"), FakeEnvironment()) is None
