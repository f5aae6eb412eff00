"""Field discovery - turns Jira create-issue metadata into form fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from tracker_form_interface.client import IssueTypeNotFoundError, TrackerClient
from tracker_form_interface.form import AllowedValue, FormField
from tracker_form_interface.outcome import Outcome
from tracker_form_interface.schema import IssueTypeSchema, SchemaField, TrackerProject

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Well-known field ids (lowercase)
# ---------------------------------------------------------------------------

COMPONENTS_FIELD = "components"
FIX_VERSIONS_FIELD = "fixversions"
AFFECTS_VERSIONS_FIELD = "versions"
PRIORITY_FIELD = "priority"
ISSUE_TYPE_FIELD = "issuetype"
ASSIGNEE_FIELD = "assignee"

#project is fixed by the integration, attachments are not supported,
#timetracking is two estimates in one field, Epic Link and Sprint need the agile API
EXCLUDED_FIELD_IDS = frozenset({"project", "attachment", "timetracking"})
EXCLUDED_FIELD_NAMES = frozenset({"epic link", "sprint"})


@dataclass(frozen=True)
class _Context:
    project: TrackerProject
    issue_type: IssueTypeSchema
    issue_type_name: str


def _components(ctx: _Context, form_field: FormField) -> None:
    form_field.allowed_values = [AllowedValue(c.id, c.name) for c in ctx.project.components]


def _versions(ctx: _Context, form_field: FormField) -> None:
    form_field.allowed_values = [AllowedValue(v.id, v.name) for v in ctx.project.versions]


def _priority(ctx: _Context, form_field: FormField) -> None:
    schema_field = ctx.issue_type.get_field(form_field.id)
    if schema_field is not None and schema_field.allowed_values is not None:
        form_field.allowed_values = [AllowedValue(p.id, p.name) for p in schema_field.named_values()]


def _issue_type(ctx: _Context, form_field: FormField) -> None:
    form_field.values = [ctx.issue_type_name]


def _assignee(ctx: _Context, form_field: FormField) -> None:
    form_field.allowed_values = project_assignees(ctx.project)


_ENRICHERS: dict[str, Callable[[_Context, FormField], None]] = {
    COMPONENTS_FIELD: _components,
    FIX_VERSIONS_FIELD: _versions,
    AFFECTS_VERSIONS_FIELD: _versions,
    PRIORITY_FIELD: _priority,
    ISSUE_TYPE_FIELD: _issue_type,
    ASSIGNEE_FIELD: _assignee,
}


def project_assignees(project: TrackerProject) -> list[AllowedValue]:
    """Every member of every project role, once, in the order first seen."""
    actors = dict.fromkeys(actor for role in project.roles for actor in role.actors)
    return [AllowedValue(actor.id, actor.display_name) for actor in actors]


def is_excluded(schema_field: SchemaField) -> bool:
    return schema_field.id.lower() in EXCLUDED_FIELD_IDS or schema_field.name.lower() in EXCLUDED_FIELD_NAMES


def build_form_field(schema_field: SchemaField) -> FormField:
    """Copy one schema field; only custom field options become allowed values."""
    return FormField(
        id=schema_field.id,
        field_name=schema_field.name,
        field_type=schema_field.field_type,
        required=schema_field.required,
        allowed_values=[AllowedValue(o.id, o.value) for o in schema_field.custom_options()],
    )


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def _collect_fields(client: TrackerClient, project_key: str, issue_type_name: str) -> list[FormField]:
    project = client.get_project(project_key)
    issue_type = project.find_issue_type(issue_type_name)
    if issue_type is None:
        raise IssueTypeNotFoundError(f"Issue type '{issue_type_name}' not found")

    metadata = client.get_create_metadata(project.key)
    if not metadata.projects:
        raise LookupError(f"No create metadata returned for project {project.key}")
    issue_type_schema = metadata.projects[0].find_issue_type(issue_type.id)
    if issue_type_schema is None:
        raise LookupError(f"No create metadata for issue type '{issue_type.name}' in project {project.key}")

    ctx = _Context(project, issue_type_schema, issue_type_name)
    result: list[FormField] = []
    for schema_field in issue_type_schema.fields:
        if is_excluded(schema_field):
            continue
        form_field = build_form_field(schema_field)
        enrich = _ENRICHERS.get(schema_field.id.lower())
        if enrich is not None:
            enrich(ctx, form_field)
        result.append(form_field)
    return result


def discover_fields(client: TrackerClient, project_key: str, issue_type_name: str) -> list[FormField]:
    """
    Args:
        client:          An open tracker client
        project_key:     Key of the tracker project the integration points at
        issue_type_name: Issue type name, matched case-insensitively

    Notes on usage:
        Any failure while talking to the tracker is logged and yields an empty list, so the
        UI shows an empty form instead of an error. An unknown issue type is still raised.

    Returns:
        The form fields in the order the tracker declares them

    Raises:
        IssueTypeNotFoundError: If the project has no issue type with that name
    """
    outcome = _discover(client, project_key, issue_type_name)
    fields = outcome.unwrap_or([], logger)
    logger.info("Discovered %d fields for %s/%s", len(fields), project_key, issue_type_name)
    return fields


def _discover(client: TrackerClient, project_key: str, issue_type_name: str) -> Outcome[list[FormField]]:
    try:
        return Outcome.ok(_collect_fields(client, project_key, issue_type_name))
    except IssueTypeNotFoundError:
        raise
    except Exception as exc:  # noqa: BLE001
        return Outcome.failed(exc)
