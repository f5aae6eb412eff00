"""Core tracker client contract and error taxonomy."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tracker_form_interface.schema import CreateMetadata, TrackerIssue, TrackerProject, TrackerUser

__all__ = [
    "TrackerClient",
    "TrackerFormError",
    "ValidationError",
    "IntegrationError",
    "IssueTypeNotFoundError",
    "RequiredFieldError",
    "UserNotFoundError",
]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TrackerFormError(Exception):
    """Base exception for everything raised by the form components."""


class ValidationError(TrackerFormError):
    """Raised when the caller sent a missing or invalid parameter. Maps to a bad-request response."""


class IntegrationError(TrackerFormError):
    """Raised when the tracker is unreachable or does not know a referenced entity."""


class IssueTypeNotFoundError(ValidationError, IntegrationError):
    """Raised when an issue type name has no match in the tracker project.

    The name comes from the caller, but only the tracker can tell it is wrong, so
    it is both a validation and an integration failure.
    """


class RequiredFieldError(ValidationError):
    """Raised when a required form field arrives without a value."""


class UserNotFoundError(IntegrationError):
    """Raised when a user-typed field names a user the tracker does not know."""


# ---------------------------------------------------------------------------
# Client contract
# ---------------------------------------------------------------------------

class TrackerClient(ABC):
    """
    Narrow view of an issue tracker used by field discovery and ticket composition.

    Notes on usage:
        A client is scoped to one operation. Open it with "with" so the connection is
        released on every exit path, and never share one instance between concurrent requests.
    """

    def __enter__(self) -> TrackerClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection. Default is a no-op."""

    @abstractmethod
    def get_project(self, project_key: str) -> TrackerProject:
        """
        Args:
            project_key: The tracker project key (e.g. 'PROJ')

        Returns:
            The project with its issue types, components, versions and roles

        Raises:
            IntegrationError: If the project cannot be fetched
        """
        raise NotImplementedError

    @abstractmethod
    def get_create_metadata(self, project_key: str) -> CreateMetadata:
        """Return the create-issue metadata of a project, with fields expanded for every issue type."""
        raise NotImplementedError

    @abstractmethod
    def find_user(self, username: str) -> TrackerUser | None:
        """Return the user with this username, or None if the tracker does not know it."""
        raise NotImplementedError

    @abstractmethod
    def create_issue(self, payload: dict) -> TrackerIssue:
        """
        Args:
            payload: A create-issue payload as built by ticket composition

        Notes on usage: Sends the payload and returns the created issue as the tracker reports it

        Raises:
            IntegrationError: If the tracker rejects the payload
        """
        raise NotImplementedError
