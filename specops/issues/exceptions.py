"""Issue-related exception classes."""


class IssueError(Exception):
    """Raised when the issue tracker API rejects or fails a request."""

    pass
