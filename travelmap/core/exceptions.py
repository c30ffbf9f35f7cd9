"""Domain-level exception hierarchy for the resolver, cache and orchestrators."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class InvalidInputError(DomainError):
    """Raised when a request parameter is malformed; rejected before any I/O."""


class MissingParameterError(InvalidInputError):
    """Raised when a required search parameter is absent."""

    def __init__(self, *names: str) -> None:
        self.names = names
        super().__init__(f"missing required parameter(s): {', '.join(names)}")


class NotFoundError(DomainError):
    """Raised when no coordinates can be resolved for a location code."""


class UpstreamUnavailableError(DomainError):
    """Raised when the travel provider fails at the transport, auth or HTTP level."""


class StoreUnavailableError(DomainError):
    """Raised when the persistence layer cannot be reached."""
