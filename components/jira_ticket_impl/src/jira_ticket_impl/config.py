"""
Integration parameters
----------------------
The host stores one set of parameters per Jira integration. They arrive either as the
integration params mapping (from_mapping) or, for development, from the environment (from_env):

    JIRA_BASE_URL     https://myorg.atlassian.net
    JIRA_PROJECT_KEY  PROJ
    JIRA_USER_EMAIL   me@example.com
    JIRA_API_TOKEN    <token from https://id.atlassian.com/manage-profile/security/api-tokens>
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from getpass import getpass
from typing import Any

from tracker_form_interface.client import ValidationError

#host param name -> attribute
_PARAM_KEYS: dict[str, str] = {
    "url": "url",
    "project": "project",
    "email": "email",
    "apiToken": "api_token",
}

_ENV_KEYS: dict[str, str] = {
    "JIRA_BASE_URL": "url",
    "JIRA_PROJECT_KEY": "project",
    "JIRA_USER_EMAIL": "email",
    "JIRA_API_TOKEN": "api_token",
}


@dataclass(frozen=True)
class IntegrationParams:
    """Connection settings of one Jira integration."""

    url: str
    project: str
    email: str
    api_token: str

    def __repr__(self) -> str:
        return f"IntegrationParams(url={self.url!r}, project={self.project!r}, email={self.email!r})"

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> IntegrationParams:
        """Build from the host's integration params.

        Raises:
            ValidationError: If any of url, project, email or apiToken is missing or blank.
        """
        values = {attr: str(params.get(key) or "").strip() for key, attr in _PARAM_KEYS.items()}
        missing = [key for key, attr in _PARAM_KEYS.items() if not values[attr]]
        if missing:
            raise ValidationError(f"Integration parameters are missing: {', '.join(missing)}")
        return cls(**values)

    @classmethod
    def from_env(cls, *, interactive: bool = False) -> IntegrationParams:
        """Build from environment variables.

        If "interactive = True" and any variable is missing, the user will be prompted.

        Raises:
            EnvironmentError: If not interactive and a variable is missing.
        """
        values = {attr: os.environ.get(name, "") for name, attr in _ENV_KEYS.items()}

        if interactive:
            if not values["url"]:
                values["url"] = input("Jira base URL (e.g. https://myorg.atlassian.net): ").strip()
            if not values["project"]:
                values["project"] = input("Jira project key: ").strip()
            if not values["email"]:
                values["email"] = input("Jira user email: ").strip()
            if not values["api_token"]:
                values["api_token"] = getpass("Jira API token: ")
        else:
            #collects the missing fields and raises an error alerting to the missing values
            missing = [name for name, attr in _ENV_KEYS.items() if not values[attr]]
            if missing:
                raise EnvironmentError(
                    f"Missing required environment variables: {', '.join(missing)}. "
                    "Set them or call from_env(interactive=True)."
                )

        return cls(**values)
