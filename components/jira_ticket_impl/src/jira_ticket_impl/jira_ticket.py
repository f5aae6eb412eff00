"""Conversion of created Jira issues into host tickets."""

from tracker_form_interface.form import Ticket
from tracker_form_interface.schema import TrackerIssue


def strip_end(text: str, suffix: str) -> str:
    """Remove one trailing occurrence of suffix."""
    if suffix and text.endswith(suffix):
        return text[: -len(suffix)]
    return text


def to_ticket(issue: TrackerIssue, base_url: str) -> Ticket:
    """Return a Ticket pointing at the issue's browse page."""
    return Ticket(
        id=issue.key,
        summary=issue.summary,
        status=issue.status,
        ticket_url=f"{strip_end(base_url, '/')}/browse/{issue.key}",
    )
