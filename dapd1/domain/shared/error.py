"""Error hierarchy for dapd1.

Error layers:
- CatalogError: Base class for all dapd1 errors
- DomainError: Bad input or a rule of the version chain was broken
- InfrastructureError: The store, the network or the configuration failed

The CLI maps any CatalogError to a message on stderr and a non-zero exit.
"""


class CatalogError(Exception):
    """Base class for all dapd1 errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(CatalogError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Lookup matched zero rows where exactly one was expected."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class MalformedLocatorError(ValidationError):
    """Dataset URL uses a disallowed scheme or has no path."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="locator")
        self.code = "MALFORMED_LOCATOR"


class PreconditionError(DomainError):
    """Operation not allowed in the dataset's current state."""


class DatasetAlreadyRegisteredError(PreconditionError):
    """A new dataset was added under a URL that is already registered."""


class DatasetNotRegisteredError(PreconditionError):
    """An update referenced a URL that was never added."""


class AlreadyObsoletedError(PreconditionError):
    """The dataset's current PIDs have already been superseded."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(CatalogError):
    """Base class for infrastructure/system errors."""


class CorruptCatalogError(InfrastructureError):
    """Store content violates an invariant that holds by construction."""


class TransportError(InfrastructureError):
    """Fetching or digesting a remote object failed."""


class StorageUnavailableError(InfrastructureError):
    """The catalog store could not be opened or is not valid."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
