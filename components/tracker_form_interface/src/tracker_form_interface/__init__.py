"""Vendor-neutral contracts for issue-creation forms."""

from tracker_form_interface.client import (
    IntegrationError,
    IssueTypeNotFoundError,
    RequiredFieldError,
    TrackerClient,
    TrackerFormError,
    UserNotFoundError,
    ValidationError,
)
from tracker_form_interface.form import (
    AllowedValue,
    DescriptionProvider,
    FieldType,
    FormField,
    Ticket,
    TicketRequest,
)
from tracker_form_interface.outcome import Outcome

__all__ = [
    "AllowedValue",
    "DescriptionProvider",
    "FieldType",
    "FormField",
    "IntegrationError",
    "IssueTypeNotFoundError",
    "Outcome",
    "RequiredFieldError",
    "Ticket",
    "TicketRequest",
    "TrackerClient",
    "TrackerFormError",
    "UserNotFoundError",
    "ValidationError",
]
