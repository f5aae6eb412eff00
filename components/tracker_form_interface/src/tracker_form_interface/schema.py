"""Read-only value structs for what the tracker reports about a project."""


from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NamedRef:
    """Any tracker entity known by id and name (issue type, component, version, priority)."""

    id: str
    name: str


@dataclass(frozen=True)
class CustomFieldOption:
    """Predefined option of a custom field."""

    id: str
    value: str


@dataclass(frozen=True)
class RoleActor:
    """Member of a project role. Equality covers the whole record."""

    id: str
    display_name: str
    name: str = ""
    actor_type: str = ""


@dataclass(frozen=True)
class ProjectRole:
    name: str
    actors: tuple[RoleActor, ...] = ()


@dataclass(frozen=True)
class TrackerProject:
    """Project as fetched from the tracker for the duration of one operation."""

    id: str
    key: str
    name: str
    issue_types: tuple[NamedRef, ...] = ()
    components: tuple[NamedRef, ...] = ()
    versions: tuple[NamedRef, ...] = ()
    roles: tuple[ProjectRole, ...] = ()

    def find_issue_type(self, name: str) -> NamedRef | None:
        """Case-insensitive lookup of an issue type by name."""
        for issue_type in self.issue_types:
            if issue_type.name.lower() == name.lower():
                return issue_type
        return None


@dataclass(frozen=True)
class SchemaField:
    """
    Create-issue metadata for one field.

    allowed_values is None when the tracker declares no fixed list, and may mix
    CustomFieldOption and NamedRef entries otherwise.
    """

    id: str
    name: str
    field_type: str
    required: bool = False
    allowed_values: tuple[CustomFieldOption | NamedRef, ...] | None = None

    def custom_options(self) -> list[CustomFieldOption]:
        return [v for v in self.allowed_values or () if isinstance(v, CustomFieldOption)]

    def named_values(self) -> list[NamedRef]:
        return [v for v in self.allowed_values or () if isinstance(v, NamedRef)]


@dataclass(frozen=True)
class IssueTypeSchema:
    id: str
    name: str
    #kept in the order the tracker returned them
    fields: tuple[SchemaField, ...] = ()

    def get_field(self, field_id: str) -> SchemaField | None:
        for one in self.fields:
            if one.id == field_id:
                return one
        return None


@dataclass(frozen=True)
class MetadataProject:
    key: str
    issue_types: tuple[IssueTypeSchema, ...] = ()

    def find_issue_type(self, issue_type_id: str) -> IssueTypeSchema | None:
        for issue_type in self.issue_types:
            if issue_type.id == issue_type_id:
                return issue_type
        return None


@dataclass(frozen=True)
class CreateMetadata:
    """Create-issue metadata response, one entry per requested project."""

    projects: tuple[MetadataProject, ...] = field(default_factory=tuple)

    def find_project(self, key: str) -> MetadataProject | None:
        for project in self.projects:
            if project.key.lower() == key.lower():
                return project
        return None


@dataclass(frozen=True)
class TrackerUser:
    name: str
    display_name: str = ""
    account_id: str = ""


@dataclass(frozen=True)
class TrackerIssue:
    key: str
    summary: str = ""
    status: str = ""
