"""
Error Taxonomy

Purpose: Standard errors for tree construction, addressing, proofs and
serialization. Defines both a Pydantic model for structured error
communication and Python exceptions for control flow.

None of these errors are retryable: every operation is a pure function of
its inputs, so retrying cannot change the outcome.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction
    EMPTY_INPUT = "EMPTY_INPUT"
    DIGEST_FAILURE = "DIGEST_FAILURE"

    # Tree addressing
    EMPTY_TREE = "EMPTY_TREE"
    INVALID_COORDINATE = "INVALID_COORDINATE"

    # Serialization
    DECODING_ERROR = "DECODING_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Error model for structured error communication.

    Used where errors are reported rather than raised, e.g. in the CLI's
    JSON output.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raised exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle tree errors.

    Carries structured error information and can be converted to a
    MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleException):
    """Raised when a build is attempted without usable leaves."""

    def __init__(
        self,
        message: str = "No leaves to build a tree from",
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=full_details,
            retryable=False,
        )


class EmptyTreeException(MerkleException):
    """Raised when a query is made against an unbuilt or empty level table."""

    def __init__(
        self,
        message: str = "Tree is empty",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
            retryable=False,
        )


class InvalidCoordinateException(MerkleException):
    """Raised when a (level, offset) position is outside the level table."""

    def __init__(
        self,
        message: str,
        level: int | None = None,
        offset: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if level is not None:
            full_details["level"] = level
        if offset is not None:
            full_details["offset"] = offset
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_COORDINATE,
            details=full_details,
            retryable=False,
        )


class DigestFailureException(MerkleException):
    """Raised when the underlying hash primitive reports an error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DIGEST_FAILURE,
            details=details,
            retryable=False,
        )


class DecodingException(MerkleException):
    """Raised when serialized bytes cannot be decoded into a node or level table."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DECODING_ERROR,
            details=details,
            retryable=False,
        )


class CanonicalizationException(MerkleException):
    """Raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
