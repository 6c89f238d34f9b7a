"""
Core Exceptions
===============

Error taxonomy of the routing engine.

Startup problems (bad routing table, handler missing for a domain) raise
ConfigurationException and stop the service. Everything raised while a
question is being answered is caught by the Router and turned into an
answer, so none of these reach an API caller.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class ConfigurationException(ApplicationException):
    """Routing table or handler wiring is invalid."""


class ExternalServiceException(ApplicationException):
    """A collaborator outside the process failed."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class KnowledgeStoreException(ExternalServiceException):
    """Knowledge store unreachable, failing or too slow (LookupUnavailable)."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Knowledge Store", message, details)


class UsageAnalyticsException(ExternalServiceException):
    """Usage analytics sink rejected a record."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Usage Analytics", message, details)


class HandlerFaultException(DomainException):
    """Unexpected failure inside a domain handler or topic specialist."""

    def __init__(
        self,
        handler: str,
        step: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict] = None
    ):
        self.handler = handler
        self.step = step
        self.cause = cause
        reason = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(
            f"Handler {handler} failed during {step}: {reason}",
            details or {"handler": handler, "step": step}
        )
