"""Helpers for pulling and validating command parameters sent by the host."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaValidationError

from tracker_form_interface.client import ValidationError
from tracker_form_interface.form import AllowedValue, FormField, TicketRequest

ISSUE_TYPE_PARAM = "issueType"


def retrieve_str(params: Mapping[str, Any], name: str, message: str | None = None) -> str:
    """Return a non-empty string parameter, or raise ValidationError with message."""
    value = params.get(name)
    if not isinstance(value, str) or not value:
        raise ValidationError(message or f"Parameter '{name}' was not provided")
    return value


# ---------------------------------------------------------------------------
# Ticket request body
# ---------------------------------------------------------------------------

class DefinedValueModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    value_id: str = Field("", alias="valueId")
    value_name: str = Field("", alias="valueName")


class PostFormFieldModel(BaseModel):
    """One form field as the host submits it."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1)
    field_name: str | None = Field(None, alias="fieldName")
    field_type: str = Field(..., min_length=1, alias="fieldType")
    required: bool = False
    value: list[str] | None = None
    defined_values: list[DefinedValueModel] = Field(default_factory=list, alias="definedValues")

    def to_form_field(self) -> FormField:
        return FormField(
            id=self.id,
            field_name=self.field_name or self.id,
            field_type=self.field_type,
            required=self.required,
            values=self.value,
            allowed_values=[AllowedValue(v.value_id, v.value_name) for v in self.defined_values],
        )


class PostTicketModel(BaseModel):
    """Body of a postTicket request."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    fields: list[PostFormFieldModel]
    back_links: dict[str, str] = Field(default_factory=dict, alias="backLinks")


def _field_path(loc: tuple) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def handle_validator_constraints(error: SchemaValidationError) -> None:
    """
    Args:
        error: The pydantic error raised while validating a request body

    Raises:
        ValidationError: With every violation in the message, if there is at least one
    """
    message = "".join(
        f"[Incorrect value in request '{detail.get('input')}' in field '{_field_path(detail['loc'])}'.]"
        for detail in error.errors()
    )
    if message:
        raise ValidationError(message) from error


def ticket_request_from_params(params: Mapping[str, Any]) -> TicketRequest:
    """Build a TicketRequest from the host's JSON body.

    Raises:
        ValidationError: Listing every malformed entry, if any.
    """
    try:
        body = PostTicketModel.model_validate(dict(params))
    except SchemaValidationError as exc:
        handle_validator_constraints(exc)
        raise
    return TicketRequest(
        fields=[f.to_form_field() for f in body.fields],
        back_links=dict(body.back_links),
    )
