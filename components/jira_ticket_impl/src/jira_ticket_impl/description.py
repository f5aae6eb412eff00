"""Default description block appended to created Jira issues."""

from tracker_form_interface.form import DescriptionProvider, TicketRequest

BACK_LINK_HEADER = "h3. Back link to Report Portal:"


class BackLinkDescriptionProvider(DescriptionProvider):
    """Lists the report links of a request in Jira wiki markup."""

    def __init__(self, header: str = BACK_LINK_HEADER) -> None:
        self._header = header

    def render(self, ticket_request: TicketRequest) -> str:
        if not ticket_request.back_links:
            return ""
        lines = [self._header]
        lines.extend(f"* [Link to defect|{url}]" for url in ticket_request.back_links.values())
        return "\n".join(lines)
