"""Exceptions raised while loading, validating, migrating and compiling DSL documents."""

from typing import List, Optional


class DSLError(Exception):
    """Base class for DSL errors."""

    pass


class InvalidDSLError(DSLError):
    """
    Raised when a raw DSL document fails schema validation.

    Attributes:
        errors: Validation errors formatted as ``path: message``
    """

    def __init__(self, errors: List[str], message: str = "Invalid DSL document"):
        self.errors = list(errors)
        self.message = message
        details = "; ".join(self.errors[:5])
        if len(self.errors) > 5:
            details += f"; ... and {len(self.errors) - 5} more"
        super().__init__(f"{message}: {details}" if details else message)


class UnsupportedDSLVersionError(DSLError):
    """Raised when no migration path leads from a document's version to the target."""

    def __init__(self, version: Optional[str], target_version: str):
        self.version = version
        self.target_version = target_version
        super().__init__(
            f"Unsupported DSL version '{version}': no migration path to '{target_version}'"
        )


class DSLMigrationError(DSLError):
    """Raised when a registered migrator misbehaves (circular chain or wrong output version)."""

    pass


class DSLCompilationError(DSLError):
    """Internal invariant violation during compilation; never caused by user input."""

    pass


class ResumeNotFoundError(DSLError):
    """Raised when the data-access layer has no resume for the request."""

    pass
