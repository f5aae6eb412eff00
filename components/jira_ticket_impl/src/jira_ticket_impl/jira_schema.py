"""Builders turning Jira REST API v2 responses into tracker value structs."""

from __future__ import annotations

from tracker_form_interface.schema import (
    CreateMetadata,
    CustomFieldOption,
    IssueTypeSchema,
    MetadataProject,
    NamedRef,
    ProjectRole,
    RoleActor,
    SchemaField,
    TrackerIssue,
    TrackerProject,
    TrackerUser,
)

# ---------------------------------------------------------------------------
# Small entities
# ---------------------------------------------------------------------------

def _named_refs(raw_items: list | None) -> tuple[NamedRef, ...]:
    return tuple(
        NamedRef(str(item.get("id", "")), item.get("name", ""))
        for item in raw_items or []
        if isinstance(item, dict)
    )


def build_allowed_value(raw: object) -> CustomFieldOption | NamedRef | None:
    """
    Classify one entry of a field's "allowedValues".

    Custom field options carry a "value"; priorities, components, versions and issue
    types carry a "name". Anything else is not understood and yields None.
    """
    if not isinstance(raw, dict) or "id" not in raw:
        return None
    if "value" in raw:
        return CustomFieldOption(str(raw["id"]), raw["value"])
    if "name" in raw:
        return NamedRef(str(raw["id"]), raw["name"])
    return None


def build_role(raw: dict) -> ProjectRole:
    actors = tuple(
        RoleActor(
            id=str(actor.get("id", "")),
            display_name=actor.get("displayName", ""),
            name=actor.get("name", ""),
            actor_type=actor.get("type", ""),
        )
        for actor in raw.get("actors") or []
        if isinstance(actor, dict)
    )
    return ProjectRole(raw.get("name", ""), actors)


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------

def build_project(raw: dict, roles: list[ProjectRole] | None = None) -> TrackerProject:
    """Return a TrackerProject from a GET /project/{key} response.

    Roles are fetched separately (the project response only links to them) and passed in.
    """
    return TrackerProject(
        id=str(raw.get("id", "")),
        key=raw.get("key", ""),
        name=raw.get("name", ""),
        issue_types=_named_refs(raw.get("issueTypes")),
        components=_named_refs(raw.get("components")),
        versions=_named_refs(raw.get("versions")),
        roles=tuple(roles or ()),
    )


# ---------------------------------------------------------------------------
# Create-issue metadata
# ---------------------------------------------------------------------------

def build_schema_field(field_key: str, raw: dict) -> SchemaField:
    raw_allowed = raw.get("allowedValues")
    allowed = None
    if raw_allowed is not None:
        #unrecognized kinds are dropped here, callers never see them
        allowed = tuple(v for v in (build_allowed_value(item) for item in raw_allowed) if v is not None)
    return SchemaField(
        id=field_key,
        name=raw.get("name", field_key),
        field_type=(raw.get("schema") or {}).get("type", ""),
        required=bool(raw.get("required", False)),
        allowed_values=allowed,
    )


def build_create_metadata(raw: dict) -> CreateMetadata:
    """Return CreateMetadata from a GET /issue/createmeta?expand=projects.issuetypes.fields response."""
    projects = []
    for raw_project in raw.get("projects") or []:
        issue_types = []
        for raw_type in raw_project.get("issuetypes") or []:
            #dicts keep insertion order, so field order is the order Jira sent
            fields = tuple(
                build_schema_field(key, value)
                for key, value in (raw_type.get("fields") or {}).items()
            )
            issue_types.append(IssueTypeSchema(str(raw_type.get("id", "")), raw_type.get("name", ""), fields))
        projects.append(MetadataProject(raw_project.get("key", ""), tuple(issue_types)))
    return CreateMetadata(tuple(projects))


# ---------------------------------------------------------------------------
# Users and issues
# ---------------------------------------------------------------------------

def build_user(raw: dict) -> TrackerUser:
    return TrackerUser(
        name=raw.get("name", ""),
        display_name=raw.get("displayName", ""),
        account_id=raw.get("accountId", ""),
    )


def build_issue(raw: dict) -> TrackerIssue:
    """Return a TrackerIssue from a GET /issue/{key} response."""
    fields = raw.get("fields") or {}
    status = fields.get("status")
    return TrackerIssue(
        key=raw.get("key", ""),
        summary=fields.get("summary") or "",
        status=status.get("name", "") if isinstance(status, dict) else "",
    )
