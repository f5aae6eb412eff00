"""Form contract - vendor-neutral description of an issue-creation form."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


#schema type names as the tracker reports them
class FieldType(str, Enum):
    ARRAY = "array"
    DATE = "date"
    NUMBER = "number"
    USER = "user"
    OPTION = "option"
    STRING = "string"

    @classmethod
    def of(cls, schema_type: str | None) -> FieldType:
        """Return the FieldType for a schema type name.

        Matching is case-insensitive. Types outside the enumeration (e.g. 'datetime', 'any')
        are converted like plain strings, so they map to STRING.
        """
        if not schema_type:
            return cls.STRING
        try:
            return cls(schema_type.lower())
        except ValueError:
            return cls.STRING


@dataclass(frozen=True)
class AllowedValue:
    """One selectable option of a constrained field."""

    value_id: str
    value_name: str


@dataclass
class FormField:
    """
    One input of the create-issue form.

    Notes on usage:
        On discovery output, "values" holds the default values (None when there are none).
        On a TicketRequest, "values" holds what the user submitted.
        "field_type" keeps the raw schema type so the UI can render it; use "kind" for conversion.
    """

    id: str
    field_name: str
    field_type: str
    required: bool = False
    values: list[str] | None = None
    allowed_values: list[AllowedValue] = field(default_factory=list)

    @property
    def kind(self) -> FieldType:
        return FieldType.of(self.field_type)

    @property
    def first_value(self) -> str | None:
        if not self.values:
            return None
        return self.values[0]

    def has_value(self) -> bool:
        """True when at least one value was submitted and the first one is not blank."""
        return bool(self.values) and self.values[0] != ""

    def to_dict(self) -> dict:
        """Serialize in the shape the host UI expects."""
        return {
            "id": self.id,
            "fieldName": self.field_name,
            "fieldType": self.field_type,
            "required": self.required,
            "value": list(self.values) if self.values is not None else None,
            "definedValues": [{"valueId": v.value_id, "valueName": v.value_name} for v in self.allowed_values],
        }


@dataclass
class TicketRequest:
    """
    A single user submission of the create-issue form.

    back_links maps a reported item id to the URL of that item in the reporting platform.
    """

    fields: list[FormField] = field(default_factory=list)
    back_links: dict[str, str] = field(default_factory=dict)

    def find_field(self, field_id: str) -> FormField | None:
        """Return the first submitted field with this id (case-insensitive), or None."""
        for one in self.fields:
            if one.id.lower() == field_id.lower():
                return one
        return None


@dataclass(frozen=True)
class Ticket:
    """A created tracker issue as reported back to the host."""

    id: str
    summary: str
    status: str
    ticket_url: str


class DescriptionProvider(ABC):
    """Renders the standard description block appended to every created issue."""

    @abstractmethod
    def render(self, ticket_request: TicketRequest) -> str:
        """Return the generated description text for this request."""
        raise NotImplementedError
