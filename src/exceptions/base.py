"""Base exception classes for Team Reports."""


class TeamReportsError(Exception):
    """
    Base exception for all Team Reports errors.

    All custom exceptions in the application should inherit from this class
    to enable consistent error handling and catching.
    """

    pass
