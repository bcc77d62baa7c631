"""
Schemas - Errors
File: errors.py

Purpose: Error taxonomy for the flat Merkle tree.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

Only two conditions are errors:
- Construction-time misconfiguration (digest / size parameters)
- Structural invariant violations while appending

"Leaf not found" and "proof does not verify" are ordinary results
(None / False) and never raise.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Configuration Errors
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    UNKNOWN_DIGEST = "UNKNOWN_DIGEST"

    # Tree Errors
    STRUCTURAL_INVARIANT_VIOLATION = "STRUCTURAL_INVARIANT_VIOLATION"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class TreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Used when an error has to be handed to a caller as data
    (e.g. the CLI's JSON output) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_CONFIGURATION],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "FlatMerkleException":
        """Convert this error model to a raisable exception."""
        exc_type = _EXCEPTIONS_BY_CODE.get(self.code, FlatMerkleException)
        if exc_type is FlatMerkleException:
            return FlatMerkleException(
                message=self.message,
                code=self.code,
                details=self.details,
            )
        return exc_type(message=self.message, details=self.details)


class ConfigurationError(TreeError):
    """Error model for rejected tree parameters."""

    code: str = Field(default=ErrorCodes.INVALID_CONFIGURATION)
    parameter: str | None = Field(
        default=None,
        description="Name of the offending parameter",
    )
    expected: str | None = Field(
        default=None,
        description="Constraint the parameter has to satisfy",
    )
    actual: str | None = Field(
        default=None,
        description="Value that was supplied",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class FlatMerkleException(Exception):
    """
    Base exception for all flatmerkle errors.

    Carries structured error information and can be converted
    to/from TreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "FLATMERKLE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> TreeError:
        """Convert this exception to a TreeError model."""
        return TreeError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationException(FlatMerkleException):
    """Raised when tree parameters are incompatible with the digest."""

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.INVALID_CONFIGURATION,
    ) -> None:
        full_details = details or {}
        if parameter:
            full_details["parameter"] = parameter
        super().__init__(
            message=message,
            code=code,
            details=full_details,
        )

    def to_error_model(self) -> ConfigurationError:
        """Convert this exception to a ConfigurationError model."""
        return ConfigurationError(
            code=self.code,
            message=self.message,
            details=self.details,
            parameter=self.details.get("parameter"),
            expected=_as_text(self.details.get("expected")),
            actual=_as_text(self.details.get("actual")),
        )


class UnknownDigestException(ConfigurationException):
    """Raised when a digest algorithm name cannot be resolved."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            parameter="algorithm",
            details=full_details,
            code=ErrorCodes.UNKNOWN_DIGEST,
        )


class StructuralException(FlatMerkleException):
    """
    Raised when the flat tree layout is found to be inconsistent.

    A correct append never produces this; seeing it means the slot
    sequence has been corrupted or the index arithmetic is broken.
    """

    def __init__(
        self,
        message: str,
        position: int | None = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.STRUCTURAL_INVARIANT_VIOLATION,
            details=full_details,
        )


def _as_text(value: Any) -> str | None:
    return None if value is None else str(value)


_EXCEPTIONS_BY_CODE: dict[str, type[FlatMerkleException]] = {
    ErrorCodes.INVALID_CONFIGURATION: ConfigurationException,
    ErrorCodes.UNKNOWN_DIGEST: UnknownDigestException,
    ErrorCodes.STRUCTURAL_INVARIANT_VIOLATION: StructuralException,
}
