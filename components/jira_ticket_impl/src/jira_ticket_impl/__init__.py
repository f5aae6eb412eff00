"""Jira implementation of the tracker form contracts."""

from jira_ticket_impl.commands import COMMANDS, execute, get_issue_fields, get_issue_types, post_ticket
from jira_ticket_impl.config import IntegrationParams
from jira_ticket_impl.field_discovery import discover_fields
from jira_ticket_impl.jira_impl import JiraClient, JiraError, NotFoundError, get_client
from jira_ticket_impl.ticket_composer import compose_issue_payload

__all__ = [
    "COMMANDS",
    "IntegrationParams",
    "JiraClient",
    "JiraError",
    "NotFoundError",
    "compose_issue_payload",
    "discover_fields",
    "execute",
    "get_client",
    "get_issue_fields",
    "get_issue_types",
    "post_ticket",
]
