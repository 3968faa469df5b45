"""Base exception for the SpringWell CLI."""


class SpringWellError(Exception):
    """Root of every error the CLI reports to the user."""

    pass
