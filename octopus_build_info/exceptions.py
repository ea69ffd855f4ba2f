"""Exceptions raised by the build information tooling."""


class BuildInfoError(Exception):
    """Base exception for all build information errors."""


class ConfigurationError(BuildInfoError):
    """A required configuration value is missing or invalid. Always fatal."""


class NotFoundError(BuildInfoError):
    """No Octopus resource matched the search term."""

    def __init__(self, resource_kind: str, search_term: str):
        self.resource_kind = resource_kind
        self.search_term = search_term
        super().__init__(f"No {resource_kind} named '{search_term}' was found")


class OctopusRequestError(BuildInfoError):
    """The Octopus Deploy API answered with a non-success status."""

    def __init__(self, status_text: str, status_code: int = None):
        self.status_text = status_text
        self.status_code = status_code
        super().__init__(status_text)
