"""Unit tests for ticket composition."""

import logging
from unittest.mock import MagicMock

import pytest

from jira_ticket_impl.ticket_composer import AUTOFIELD_VALUE, compose_issue_payload, match_options, parse_date
from tracker_form_interface.client import (
    IntegrationError,
    IssueTypeNotFoundError,
    RequiredFieldError,
    UserNotFoundError,
    ValidationError,
)
from tracker_form_interface.form import DescriptionProvider, FormField, TicketRequest
from tracker_form_interface.schema import (
    CreateMetadata,
    CustomFieldOption,
    IssueTypeSchema,
    MetadataProject,
    NamedRef,
    SchemaField,
)


@pytest.fixture
def provider():
    provider = MagicMock(spec=DescriptionProvider)
    provider.render.return_value = "Generated by RP"
    return provider


@pytest.fixture
def compose(tracker, project, provider):
    """Compose a Bug payload from (id, type, values) triples and return its fields."""
    def _compose(*submitted, required=False):
        request = TicketRequest(
            fields=[FormField(field_id, field_id, field_type, required, values) for field_id, field_type, values in submitted]
        )
        return compose_issue_payload(tracker, project, NamedRef("1", "Bug"), request, provider)["fields"]
    return _compose


#--------------------------- payload skeleton --------------------------

def test_project_and_issue_type_come_from_context(compose):
    fields = compose(("project", "project", ["OTHER"]), ("issuetype", "issuetype", ["Task"]))

    assert fields["project"] == {"key": "PROJ"}
    assert fields["issuetype"] == {"id": "1"}


def test_summary_is_copied(compose):
    fields = compose(("summary", "string", ["Login fails"]))

    assert fields["summary"] == "Login fails"


def test_empty_and_blank_values_are_skipped(compose):
    fields = compose(("summary", "string", []), ("customfield_10800", "string", [""]), ("labels", "array", None))

    assert "summary" not in fields
    assert "customfield_10800" not in fields
    assert "labels" not in fields


def test_field_unknown_to_schema_is_ignored(compose):
    fields = compose(("customfield_99999", "string", ["x"]))

    assert "customfield_99999" not in fields


#--------------------------- description --------------------------

def test_description_is_user_text_then_generated_block(compose, provider):
    fields = compose(("description", "string", ["my notes"]))

    assert fields["description"] == "my notes\nGenerated by RP"
    provider.render.assert_called_once()


def test_description_without_user_text_keeps_leading_newline(compose):
    fields = compose(("summary", "string", ["s"]))

    assert fields["description"] == "\nGenerated by RP"


#--------------------------- well-known fields --------------------------

def test_priority_is_mapped_by_name(compose):
    fields = compose(("priority", "priority", ["High"]))

    assert fields["priority"] == {"id": "1"}


def test_unknown_priority_is_not_written(compose):
    fields = compose(("priority", "priority", ["Unknown"]))

    assert "priority" not in fields


def test_priority_lookup_is_exact(compose):
    fields = compose(("priority", "priority", ["high"]))

    assert "priority" not in fields


def test_assignee_and_reporter_by_name(compose):
    fields = compose(("assignee", "user", ["alice"]), ("reporter", "user", ["bob"]))

    assert fields["assignee"] == {"name": "alice"}
    assert fields["reporter"] == {"name": "bob"}


def test_components_and_versions_pass_names_through(compose):
    fields = compose(
        ("components", "array", ["Backend", "UI"]),
        ("versions", "array", ["1.0"]),
        ("fixVersions", "array", ["2.0", "3.0"]),
    )

    assert fields["components"] == [{"name": "Backend"}, {"name": "UI"}]
    assert fields["versions"] == [{"name": "1.0"}]
    assert fields["fixVersions"] == [{"name": "2.0"}, {"name": "3.0"}]


def test_well_known_ids_are_written_in_jira_casing(compose):
    fields = compose(
        ("Summary", "string", ["Login fails"]),
        ("FIXVERSIONS", "array", ["2.0"]),
        ("Priority", "priority", ["High"]),
        ("Assignee", "user", ["alice"]),
    )

    assert fields["summary"] == "Login fails"
    assert fields["fixVersions"] == [{"name": "2.0"}]
    assert fields["priority"] == {"id": "1"}
    assert fields["assignee"] == {"name": "alice"}
    assert not {"Summary", "FIXVERSIONS", "Priority", "Assignee"} & fields.keys()


#--------------------------- fields with predefined options --------------------------

def test_single_option_is_mapped_to_id(compose):
    fields = compose(("customfield_10300", "option", ["Minor"]))

    assert fields["customfield_10300"] == {"id": "302"}


def test_array_options_keep_every_match(compose):
    fields = compose(("customfield_10400", "array", ["Windows", "Linux", "BeOS"]))

    # Assert: matches follow the schema order, unmatched values are dropped
    assert fields["customfield_10400"] == [{"id": "401"}, {"id": "402"}]


def test_unmatched_single_option_falls_back_to_autofield(compose, caplog):
    fields = compose(("customfield_10300", "option", ["Blocker"]))

    assert fields["customfield_10300"] == AUTOFIELD_VALUE
    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_match_options_reports_failure_as_outcome():
    schema_field = SchemaField("cf", "cf", "option", allowed_values=(CustomFieldOption("1", "A"),))

    outcome = match_options(schema_field, FormField("cf", "cf", "option", values=["B"]))

    assert not outcome.is_ok
    assert isinstance(outcome.error, IndexError)


#--------------------------- type-driven conversion --------------------------

def test_labels_are_split_on_spaces(compose):
    fields = compose(("labels", "array", ["a b c"]))

    assert fields["labels"] == ["a", "b", "c"]


def test_other_arrays_pass_values_through(tracker, project, provider, bug_schema):
    # Setup: an array field without predefined options
    schema = IssueTypeSchema(
        bug_schema.id, bug_schema.name, bug_schema.fields + (SchemaField("customfield_11000", "Tags", "array"),)
    )
    tracker.get_create_metadata.return_value = CreateMetadata((MetadataProject("PROJ", (schema,)),))
    request = TicketRequest(fields=[FormField("customfield_11000", "Tags", "array", values=["x y", "z"])])

    fields = compose_issue_payload(tracker, project, NamedRef("1", "Bug"), request, provider)["fields"]

    assert fields["customfield_11000"] == ["x y", "z"]


def test_number_is_parsed(compose):
    fields = compose(("customfield_10500", "number", ["5"]))

    assert fields["customfield_10500"] == 5


def test_non_numeric_number_raises(compose):
    with pytest.raises(ValueError):
        compose(("customfield_10500", "number", ["five"]))


def test_user_field_is_resolved(compose, tracker):
    fields = compose(("customfield_10700", "user", ["reviewer"]))

    tracker.find_user.assert_called_once_with("reviewer")
    assert fields["customfield_10700"] == {"name": "reviewer"}


def test_unknown_user_raises_integration_error(compose, tracker):
    tracker.find_user.return_value = None

    with pytest.raises(IntegrationError) as exc_info:
        compose(("customfield_10700", "user", ["ghost"]))

    assert isinstance(exc_info.value, UserNotFoundError)
    assert "ghost" in str(exc_info.value)


def test_date_is_written_as_iso_date(compose):
    fields = compose(("customfield_10600", "date", ["2024-03-05"]))

    assert fields["customfield_10600"] == "2024-03-05"


def test_unparsable_date_is_omitted_and_logged(compose, caplog):
    fields = compose(("customfield_10600", "date", ["05/03/2024"]))

    assert "customfield_10600" not in fields
    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_parse_date_outcome():
    assert parse_date("2024-12-31").value == "2024-12-31"
    assert not parse_date("2024-13-01").is_ok


def test_other_types_copy_first_value(compose):
    fields = compose(("customfield_10800", "string", ["staging", "prod"]))

    assert fields["customfield_10800"] == "staging"


#--------------------------- validation and resolution --------------------------

def test_required_field_without_values_raises(tracker, compose):
    with pytest.raises(ValidationError) as exc_info:
        compose(("summary", "string", []), required=True)

    assert isinstance(exc_info.value, RequiredFieldError)
    assert "summary" in str(exc_info.value)
    tracker.get_create_metadata.assert_not_called()


def test_required_field_with_none_raises(compose):
    with pytest.raises(RequiredFieldError):
        compose(("summary", "string", None), required=True)


def test_project_missing_from_metadata_raises(tracker, compose):
    tracker.get_create_metadata.return_value = CreateMetadata(())

    with pytest.raises(IntegrationError) as exc_info:
        compose(("summary", "string", ["s"]))

    assert "Project PROJ not found" in str(exc_info.value)


def test_issue_type_missing_from_metadata_raises(tracker, project, provider):
    request = TicketRequest(fields=[FormField("summary", "Summary", "string", values=["s"])])

    with pytest.raises(IssueTypeNotFoundError):
        compose_issue_payload(tracker, project, NamedRef("2", "Task"), request, provider)
