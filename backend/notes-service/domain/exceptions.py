"""Domain exceptions for the GitHub notes service.

This module defines the error taxonomy shared by the domain services.
Every exception carries an ``error_code`` that the application layer
uses when translating the error into an HTTP response.

Hierarchy:
    DomainError
    ├── InvalidArgumentError
    ├── NotFoundError
    │   ├── NoteNotFoundError
    │   └── PullRequestNotFoundError
    ├── PreconditionFailedError
    ├── RemoteServiceError
    │   ├── RemoteUnauthorizedError
    │   ├── RemoteForbiddenError
    │   ├── RateLimitedError
    │   └── UpstreamError
    ├── DuplicatePullRequestError
    └── NoteError
"""

from typing import Optional


class DomainError(Exception):
    """Base exception for all domain errors."""

    error_code = "DOMAIN_ERROR"


class InvalidArgumentError(DomainError, ValueError):
    """Raised when input is malformed. Always raised before any I/O."""

    error_code = "INVALID_ARGUMENT"


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist or is not visible."""

    error_code = "NOT_FOUND"


class NoteNotFoundError(NotFoundError):
    """Raised when a note is absent or owned by another user."""

    pass


class PullRequestNotFoundError(NotFoundError):
    """Raised when GitHub reports that a pull request does not exist."""

    error_code = "PULL_REQUEST_NOT_FOUND"

    def __init__(self, repo_owner: str, repo_name: str, number: int):
        super().__init__(f"PR {number} not found in {repo_owner}/{repo_name}")
        self.repo_owner = repo_owner
        self.repo_name = repo_name
        self.number = number


class PreconditionFailedError(DomainError):
    """Raised when an operation needs state the user has not configured."""

    error_code = "PRECONDITION_FAILED"


class RemoteServiceError(DomainError):
    """Base exception for failures reported by the GitHub API.

    Attributes:
        status_code (Optional[int]): HTTP status returned by GitHub, if any.
    """

    error_code = "GITHUB_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteUnauthorizedError(RemoteServiceError):
    """Raised when GitHub rejects the stored token."""

    error_code = "GITHUB_UNAUTHORIZED"


class RemoteForbiddenError(RemoteServiceError):
    """Raised when the token lacks scope or the repository is inaccessible."""

    error_code = "GITHUB_FORBIDDEN"


class RateLimitedError(RemoteServiceError):
    """Raised when GitHub rate limits the caller. The request is retryable.

    Attributes:
        retry_after (Optional[int]): Seconds to wait, when GitHub says so.
    """

    error_code = "GITHUB_RATE_LIMITED"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after


class UpstreamError(RemoteServiceError):
    """Raised for unexpected GitHub responses and transport failures."""

    error_code = "GITHUB_UPSTREAM_ERROR"


class DuplicatePullRequestError(DomainError):
    """Raised by storage when a pull request natural key already exists.

    Handled inside the resolver; never surfaced to callers.
    """

    error_code = "DUPLICATE_PULL_REQUEST"


class NoteError(DomainError):
    """Raised when a note operation fails unexpectedly at the storage layer."""

    error_code = "NOTE_ERROR"
