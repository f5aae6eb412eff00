"""Shared fixtures: a Jira project and its create-issue metadata as value structs."""

from unittest.mock import MagicMock

import pytest

from jira_ticket_impl.jira_impl import JiraClient
from tracker_form_interface.schema import (
    CreateMetadata,
    CustomFieldOption,
    IssueTypeSchema,
    MetadataProject,
    NamedRef,
    ProjectRole,
    RoleActor,
    SchemaField,
    TrackerProject,
    TrackerUser,
)

ALICE = RoleActor("a1", "Alice", "alice", "atlassian-user-role-actor")
BOB = RoleActor("b1", "Bob", "bob", "atlassian-user-role-actor")
CAROL = RoleActor("c1", "Carol", "carol", "atlassian-user-role-actor")


@pytest.fixture
def project():
    return TrackerProject(
        id="10000",
        key="PROJ",
        name="Project",
        issue_types=(NamedRef("1", "Bug"), NamedRef("2", "Task")),
        components=(NamedRef("10", "Backend"), NamedRef("11", "UI")),
        versions=(NamedRef("20", "1.0"), NamedRef("21", "2.0")),
        roles=(
            ProjectRole("Developers", (ALICE, BOB)),
            ProjectRole("Administrators", (ALICE, CAROL)),
        ),
    )


@pytest.fixture
def bug_schema():
    """Create metadata of the Bug issue type, fields in the order Jira sends them."""
    return IssueTypeSchema(
        id="1",
        name="Bug",
        fields=(
            SchemaField("summary", "Summary", "string", required=True),
            SchemaField("issuetype", "Issue Type", "issuetype", required=True, allowed_values=(NamedRef("1", "Bug"),)),
            SchemaField("project", "Project", "project", required=True),
            SchemaField("description", "Description", "string"),
            SchemaField("priority", "Priority", "priority", allowed_values=(NamedRef("1", "High"), NamedRef("2", "Low"))),
            SchemaField("components", "Component/s", "array", allowed_values=(NamedRef("99", "Stale"),)),
            SchemaField("fixVersions", "Fix Version/s", "array", allowed_values=()),
            SchemaField("versions", "Affects Version/s", "array"),
            SchemaField("assignee", "Assignee", "user"),
            SchemaField("labels", "Labels", "array"),
            SchemaField("attachment", "Attachment", "array"),
            SchemaField("timetracking", "Time tracking", "timetracking"),
            SchemaField("customfield_10100", "Epic Link", "any"),
            SchemaField("customfield_10200", "Sprint", "array"),
            SchemaField(
                "customfield_10300",
                "Severity",
                "option",
                allowed_values=(CustomFieldOption("301", "Major"), CustomFieldOption("302", "Minor"), NamedRef("9", "Other")),
            ),
            SchemaField(
                "customfield_10400",
                "Platforms",
                "array",
                allowed_values=(CustomFieldOption("401", "Linux"), CustomFieldOption("402", "Windows")),
            ),
            SchemaField("customfield_10500", "Story points", "number"),
            SchemaField("customfield_10600", "Found on", "date"),
            SchemaField("customfield_10700", "Reviewer", "user"),
            SchemaField("customfield_10800", "Environment", "string"),
        ),
    )


@pytest.fixture
def metadata(bug_schema):
    return CreateMetadata((MetadataProject("PROJ", (bug_schema,)),))


@pytest.fixture
def tracker(project, metadata):
    """A JiraClient stand-in answering with the project and metadata fixtures."""
    client = MagicMock(spec=JiraClient)
    client.__enter__.return_value = client
    client.base_url = "https://test.atlassian.net"
    client.get_project.return_value = project
    client.get_create_metadata.return_value = metadata
    client.find_user.return_value = TrackerUser("reviewer", "Reviewer")
    return client
