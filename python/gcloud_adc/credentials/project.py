"""
gcloud_adc/credentials/project.py

Picks the project a client should bill and address by default.
"""

from __future__ import annotations

import logging
from typing import Optional

from gcloud_adc.models.credentials_file import CredentialsFile
from gcloud_adc.models.settings import LocatorSettings
from gcloud_adc.utils.environment import CredentialEnvironment, SystemEnvironment

logger = logging.getLogger(__name__)


def resolve_project_id(
    credentials: Optional[CredentialsFile] = None,
    environment: Optional[CredentialEnvironment] = None,
    settings: Optional[LocatorSettings] = None,
) -> Optional[str]:
    """Return the default project id, or None.

    Order: GOOGLE_CLOUD_PROJECT, GCLOUD_PROJECT, the credentials' project_id,
    then their quota_project_id. Empty values are skipped.
    """
    env = environment or SystemEnvironment()
    cfg = settings or LocatorSettings()

    for name in cfg.project_env_vars:
        value = env.get_var(name)
        if value:
            logger.debug("Project id taken from $%s", name)
            return value

    if credentials is None:
        return None
    return credentials.project_id or credentials.quota_project_id or None


__all__ = ["resolve_project_id"]
