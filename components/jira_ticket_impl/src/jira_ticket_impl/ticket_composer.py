"""Ticket composition - turns a filled form into a Jira create-issue payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from tracker_form_interface.client import (
    IntegrationError,
    IssueTypeNotFoundError,
    RequiredFieldError,
    TrackerClient,
    UserNotFoundError,
)
from tracker_form_interface.form import DescriptionProvider, FieldType, FormField, TicketRequest
from tracker_form_interface.outcome import Outcome
from tracker_form_interface.schema import IssueTypeSchema, NamedRef, SchemaField, TrackerProject

logger = logging.getLogger(__name__)

#written when a field with predefined options cannot be mapped
AUTOFIELD_VALUE = "ReportPortal autofield"

#format of the UI calendar control
DATE_FORMAT = "%Y-%m-%d"

LABELS_FIELD = "labels"


@dataclass
class _Composition:
    client: TrackerClient
    schema: IssueTypeSchema
    fields: dict[str, Any]
    description: str = ""


# ---------------------------------------------------------------------------
# Well-known field handlers
# ---------------------------------------------------------------------------

def _skip(comp: _Composition, key: str, one: FormField) -> None:
    """Project and issue type are already set on the payload skeleton."""


def _description(comp: _Composition, key: str, one: FormField) -> None:
    comp.description = one.first_value or ""


def _verbatim(comp: _Composition, key: str, one: FormField) -> None:
    comp.fields[key] = one.first_value


def _by_name(comp: _Composition, key: str, one: FormField) -> None:
    comp.fields[key] = {"name": one.first_value}


def _names(comp: _Composition, key: str, one: FormField) -> None:
    comp.fields[key] = [{"name": value} for value in one.values or []]


def _priority(comp: _Composition, key: str, one: FormField) -> None:
    priority = find_priority(comp.schema, one.first_value or "")
    if priority is not None:
        comp.fields[key] = {"id": priority.id}


#lowercase field id -> (payload key, handler); the payload key is Jira's casing, not the submitted one
_HANDLERS: dict[str, tuple[str, Callable[[_Composition, str, FormField], None]]] = {
    "issuetype": ("issuetype", _skip),
    "project": ("project", _skip),
    "description": ("description", _description),
    "summary": ("summary", _verbatim),
    "assignee": ("assignee", _by_name),
    "reporter": ("reporter", _by_name),
    "priority": ("priority", _priority),
    "components": ("components", _names),
    "versions": ("versions", _names),
    "fixversions": ("fixVersions", _names),
}


def find_priority(schema: IssueTypeSchema, name: str) -> NamedRef | None:
    """Exact-name lookup of a priority among the schema's allowed priorities."""
    priority_field = next((f for f in schema.fields if f.id.lower() == "priority"), None)
    if priority_field is None:
        return None
    for priority in priority_field.named_values():
        if priority.name == name:
            return priority
    return None


# ---------------------------------------------------------------------------
# Type-driven conversion
# ---------------------------------------------------------------------------

def match_options(schema_field: SchemaField, one: FormField) -> Outcome[Any]:
    """
    Map submitted values onto the schema field's custom options, matched by option value.

    Array fields get every match; other fields get the first one. A single-valued field
    with no match is a failed outcome.
    """
    def _match() -> Any:
        matched = [{"id": option.id} for option in schema_field.custom_options() if option.value in (one.values or [])]
        if one.kind is FieldType.ARRAY:
            return matched
        return matched[0]

    return Outcome.capture(_match)


def parse_date(value: str) -> Outcome[str]:
    """Parse a UI calendar value and return it as an ISO-8601 date."""
    return Outcome.capture(lambda: datetime.strptime(value, DATE_FORMAT).date().isoformat())


def split_labels(value: str) -> list[str]:
    """Labels arrive as one space separated string."""
    return value.split()


def _convert(comp: _Composition, one: FormField, schema_field: SchemaField) -> None:
    if schema_field.allowed_values is not None:
        comp.fields[one.id] = match_options(schema_field, one).unwrap_or(AUTOFIELD_VALUE, logger)
        return

    kind = one.kind
    first = one.first_value or ""
    if kind is FieldType.ARRAY:
        if one.id.lower() == LABELS_FIELD:
            comp.fields[one.id] = split_labels(first)
        else:
            comp.fields[one.id] = list(one.values or [])
    elif kind is FieldType.NUMBER:
        #a non-numeric value raises ValueError to the caller
        comp.fields[one.id] = int(first)
    elif kind is FieldType.USER:
        if first != "":
            user = comp.client.find_user(first)
            if user is None:
                raise UserNotFoundError(f"Value for '{first}' field with 'user' type wasn't found in Jira")
            comp.fields[one.id] = {"name": user.name}
    elif kind is FieldType.DATE:
        date = parse_date(first).unwrap_or(None, logger)
        if date is not None:
            comp.fields[one.id] = date
    else:
        comp.fields[one.id] = first


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def check_required(ticket_request: TicketRequest) -> None:
    """Raise RequiredFieldError for the first required field submitted without values."""
    for one in ticket_request.fields:
        if one.required and not one.values:
            raise RequiredFieldError(f"Required parameter '{one.field_name}' is empty")


def resolve_schema(client: TrackerClient, project: TrackerProject, issue_type: NamedRef) -> IssueTypeSchema:
    """Fetch create metadata again and find the schema of this project's issue type."""
    metadata = client.get_create_metadata(project.key)
    metadata_project = metadata.find_project(project.key)
    if metadata_project is None:
        raise IntegrationError(f"Project {project.key} not found")
    schema = metadata_project.find_issue_type(issue_type.id)
    if schema is None:
        raise IssueTypeNotFoundError(f"Issue type '{issue_type.name}' not found in project {project.key}")
    return schema


def compose_issue_payload(
    client: TrackerClient,
    project: TrackerProject,
    issue_type: NamedRef,
    ticket_request: TicketRequest,
    description_provider: DescriptionProvider,
) -> dict:
    """
    Args:
        client:               An open tracker client, used for metadata and user lookups
        project:              The target project
        issue_type:           The target issue type of that project
        ticket_request:       The submitted form
        description_provider: Renders the block appended to the user's description

    Notes on usage:
        Fields that are empty, or unknown to the schema, are skipped. The description is
        always written as the user's text, a newline, then the rendered block.

    Returns:
        The create-issue payload, {"fields": {...}}

    Raises:
        RequiredFieldError: If a required field has no values
        IntegrationError: If the project or issue type is missing from the metadata,
            or a user-typed field names an unknown user
        ValueError: If a number field holds a non-numeric value
    """
    check_required(ticket_request)
    schema = resolve_schema(client, project, issue_type)

    comp = _Composition(
        client=client,
        schema=schema,
        fields={"project": {"key": project.key}, "issuetype": {"id": issue_type.id}},
    )
    for one in ticket_request.fields:
        if not one.has_value():
            continue

        entry = _HANDLERS.get(one.id.lower())
        if entry is not None:
            key, handler = entry
            handler(comp, key, one)
            continue

        schema_field = schema.get_field(one.id)
        if schema_field is None:
            logger.debug("Field %s is not in the create metadata of %s, ignored", one.id, schema.name)
            continue
        _convert(comp, one, schema_field)

    comp.fields["description"] = comp.description + "\n" + description_provider.render(ticket_request)
    return {"fields": comp.fields}
