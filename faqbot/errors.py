"""Exceptions shared by the service layer and the HTTP boundary."""


class ValidationError(ValueError):
    """Raised when required input is missing or malformed (empty question, blank chat message, ...).

    The router maps it to HTTP 400. It is raised before any state is written.
    """
