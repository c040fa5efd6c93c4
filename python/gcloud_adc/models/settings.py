from __future__ import annotations

from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import model_validator


class LocatorSettings(BaseModel):
    """
    Names consulted while locating Application Default Credentials.

    Defaults follow the gcloud conventions; override them to point a client at
    a differently named variable or config directory.
    """

    model_config = ConfigDict(frozen=True)

    json_env_var: str = "GOOGLE_APPLICATION_CREDENTIALS_JSON"
    path_env_var: str = "GOOGLE_APPLICATION_CREDENTIALS"
    appdata_env_var: str = "APPDATA"
    project_env_vars: Tuple[str, ...] = ("GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT")
    unix_config_dirs: Tuple[str, ...] = Field(default=(".config", "gcloud"))
    windows_config_dirs: Tuple[str, ...] = Field(default=("gcloud",))
    credentials_file_name: str = "application_default_credentials.json"

    @model_validator(mode="after")
    def check_distinct_env_vars(self) -> LocatorSettings:
        """
        The inline and path variables must differ, otherwise one value would be
        read as both a document and a path.
        """
        if self.json_env_var == self.path_env_var:
            raise ValueError("json_env_var and path_env_var must be different.")
        return self
