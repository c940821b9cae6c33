"""Service-level exceptions."""


class ContactCenterError(Exception):
    """Base class for errors raised by the vendor service wrappers."""


class AuthenticationError(ContactCenterError):
    """Raised when the password grant does not yield an access token."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class WorkspaceApiError(ContactCenterError):
    """Raised when a Workspace API request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(
            message if status_code is None else f"{message} (status code {status_code})"
        )


class EmptySearchError(ContactCenterError):
    """Raised when a target search returns no results."""

    def __init__(self, search_term: str):
        self.search_term = search_term
        super().__init__("Search came up empty")
