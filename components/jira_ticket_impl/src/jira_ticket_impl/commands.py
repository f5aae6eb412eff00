"""
Host commands
-------------
Entry points the reporting platform calls by name. Each command receives the integration
params (IntegrationParams or the raw mapping) and a params mapping from the request, opens
its own Jira client for the duration of the call and closes it on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

from jira_ticket_impl.config import IntegrationParams
from jira_ticket_impl.description import BackLinkDescriptionProvider
from jira_ticket_impl.field_discovery import ISSUE_TYPE_FIELD, discover_fields
from jira_ticket_impl.jira_impl import get_client
from jira_ticket_impl.jira_ticket import to_ticket
from jira_ticket_impl.params import ISSUE_TYPE_PARAM, retrieve_str, ticket_request_from_params
from jira_ticket_impl.ticket_composer import compose_issue_payload
from tracker_form_interface.client import IssueTypeNotFoundError, ValidationError
from tracker_form_interface.form import DescriptionProvider, Ticket

logger = logging.getLogger(__name__)


def _integration(integration: IntegrationParams | Mapping[str, Any]) -> IntegrationParams:
    if isinstance(integration, IntegrationParams):
        return integration
    return IntegrationParams.from_mapping(integration)


def get_issue_fields(integration: IntegrationParams | Mapping[str, Any], params: Mapping[str, Any]) -> list[dict]:
    """Return the create-issue form of the integration's project for params['issueType'], as host JSON."""
    issue_type = retrieve_str(params, ISSUE_TYPE_PARAM, "Issue type is not provided")
    settings = _integration(integration)
    with get_client(settings) as client:
        return [one.to_dict() for one in discover_fields(client, settings.project, issue_type)]


def get_issue_types(integration: IntegrationParams | Mapping[str, Any], params: Mapping[str, Any]) -> list[str]:
    """Return the issue type names of the integration's project, in project order."""
    settings = _integration(integration)
    with get_client(settings) as client:
        project = client.get_project(settings.project)
    return [issue_type.name for issue_type in project.issue_types]


def post_ticket(
    integration: IntegrationParams | Mapping[str, Any],
    params: Mapping[str, Any],
    description_provider: DescriptionProvider | None = None,
) -> Ticket:
    """
    Create a Jira issue from a submitted form.

    Notes on usage:
        params is the ticket request body. The issue type is taken from its 'issuetype' field.

    Raises:
        ValidationError: If the request is malformed, has no issue type, or lacks a required value
        IntegrationError: If Jira rejects or cannot serve any step
    """
    ticket_request = ticket_request_from_params(params)
    issue_type_field = ticket_request.find_field(ISSUE_TYPE_FIELD)
    if issue_type_field is None or not issue_type_field.has_value():
        raise ValidationError("Issue type is not provided")
    issue_type_name = issue_type_field.first_value or ""

    settings = _integration(integration)
    provider = description_provider or BackLinkDescriptionProvider()
    with get_client(settings) as client:
        project = client.get_project(settings.project)
        issue_type = project.find_issue_type(issue_type_name)
        if issue_type is None:
            raise IssueTypeNotFoundError(f"Issue type '{issue_type_name}' not found")
        payload = compose_issue_payload(client, project, issue_type, ticket_request, provider)
        issue = client.create_issue(payload)
        ticket = to_ticket(issue, client.base_url)
    logger.info("Ticket %s posted to project %s", issue.key, settings.project)
    return ticket


COMMANDS: dict[str, Callable[..., Any]] = {
    "getIssueFields": get_issue_fields,
    "getIssueTypes": get_issue_types,
    "postTicket": post_ticket,
}


def execute(name: str, integration: IntegrationParams | Mapping[str, Any], params: Mapping[str, Any]) -> Any:
    """Run the command registered under name."""
    command = COMMANDS.get(name)
    if command is None:
        raise ValidationError(f"Command '{name}' is not found")
    return command(integration, params)
