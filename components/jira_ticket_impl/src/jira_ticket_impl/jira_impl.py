"""
Jira REST client
----------------
Implements the TrackerClient contract over Jira REST API v2. v2 is used because the
create-issue payload refers to users by name and takes a plain-text description.

Build one with get_client(params) and use it as a context manager; the HTTP session
is closed when the block exits.

Dependencies:
    uv add requests
"""
from __future__ import annotations

import logging
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from jira_ticket_impl.config import IntegrationParams
from jira_ticket_impl.jira_schema import (
    build_create_metadata,
    build_issue,
    build_project,
    build_role,
    build_user,
)
from tracker_form_interface.client import IntegrationError, TrackerClient
from tracker_form_interface.schema import CreateMetadata, ProjectRole, TrackerIssue, TrackerProject, TrackerUser

logger = logging.getLogger(__name__)


class JiraError(IntegrationError):
    """Raised when the Jira API returns an unexpected response."""


class NotFoundError(JiraError):
    """Raised when a requested Jira resource does not exist."""


# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(TrackerClient):
    """
    Args:
        base_url:   Jira instance root URL (e.g. 'https://myorg.atlassian.net')
        user_email: Email associated with the Jira account
        api_token:  API token generated from Atlassian account settings
        timeout:    Seconds to wait for each HTTP call
    """

    _API_PREFIX = "/rest/api/2"

    def __init__(self, base_url: str, user_email: str, api_token: str, *, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.auth = HTTPBasicAuth(user_email, api_token)
        self._session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self._base_url}{self._API_PREFIX}{path}"

    def _get_url(self, url: str, params: dict | None = None) -> Any:
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise JiraError(f"Jira is unreachable: {exc}") from exc
        self._raise_for_status(response)
        return response.json()

    def _get(self, path: str, params: dict | None = None) -> Any:
        return self._get_url(self._url(path), params=params)

    def _post(self, path: str, body: dict) -> Any:
        try:
            response = self._session.post(self._url(path), json=body, timeout=self._timeout)
        except requests.RequestException as exc:
            raise JiraError(f"Jira is unreachable: {exc}") from exc
        self._raise_for_status(response)
        return response.json()

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if response.status_code == 404:
            raise NotFoundError(f"Resource not found: {response.url}")
        if not response.ok:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            raise JiraError(f"Jira API error {response.status_code}: {detail}")

    # ------------------------------------------------------------------
    # TrackerClient contract
    # ------------------------------------------------------------------

    def get_project(self, project_key: str) -> TrackerProject:
        """Fetch a project together with the members of each of its roles."""
        data = self._get(f"/project/{project_key}")
        return build_project(data, self._get_roles(data.get("roles") or {}))

    def _get_roles(self, role_links: dict[str, str]) -> list[ProjectRole]:
        #the project response only carries {role name: role url}; members need one call per role
        roles = []
        for name, url in role_links.items():
            logger.debug("Fetching members of role %s", name)
            roles.append(build_role(self._get_url(url)))
        return roles

    def get_create_metadata(self, project_key: str) -> CreateMetadata:
        data = self._get(
            "/issue/createmeta",
            params={"projectKeys": project_key, "expand": "projects.issuetypes.fields"},
        )
        return build_create_metadata(data)

    def find_user(self, username: str) -> TrackerUser | None:
        """
        Look a user up by login name; None if Jira answers 404.

        Jira Server and Data Center accept the username parameter. Jira Cloud rejects it
        with a 400, so there an unknown user surfaces as a JiraError, not None.
        """
        try:
            data = self._get("/user", params={"username": username})
        except NotFoundError:
            return None
        return build_user(data)

    def create_issue(self, payload: dict) -> TrackerIssue:
        """Create a Jira issue and return it as Jira reports it afterwards."""
        data = self._post("/issue", payload)
        logger.info("Jira issue %s created", data.get("key"))
        return self.get_issue(data["key"])

    def get_issue(self, issue_key: str) -> TrackerIssue:
        data = self._get(f"/issue/{issue_key}", params={"fields": "summary,status"})
        return build_issue(data)


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(params: IntegrationParams) -> JiraClient:
    """Return a JiraClient for one integration.

    Notes on usage:
        The client owns an HTTP session; open it with "with get_client(params) as client:".
    """
    return JiraClient(params.url, params.email, params.api_token)
