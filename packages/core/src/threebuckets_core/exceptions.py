"""Custom exceptions for the Three Buckets engine.

The calculation functions are total over well-typed input and raise nothing
of their own. These exceptions belong to the boundary around the engine:
the record adapter that turns persistence-shaped client records into engine
input, and the settings loader. All of them inherit from ThreeBucketsError.

Example:
    try:
        calc_input = build_calculation_input(client_record)
    except RecordNotFoundError:
        return not_found()
    except ValidationError as e:
        return bad_request(e.details)
    except ThreeBucketsError as e:
        logger.error("calculation_failed", error=str(e))
        raise
"""

from typing import Any, Optional


class ThreeBucketsError(Exception):
    """Base exception for all Three Buckets errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the caller can fix the problem and retry.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(ThreeBucketsError):
    """Raised when an external record fails validation before reaching the engine.

    Attributes:
        field: Dotted path of the field that failed validation.
        value: The rejected value (if safe to include).
        constraint: The validation rule that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Invalid payout type",
        ...     field="home_equity.hecm_payout_type",
        ...     value="reverse",
        ...     constraint="Must be one of: none, lump_sum, loc, tenure",
        ... )
        ValidationError: Invalid payout type
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name or dotted path of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Defaults to True since the advisor can correct the
                record and recalculate.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class RecordNotFoundError(ThreeBucketsError):
    """Raised when a client record lacks the data a calculation needs.

    Example:
        >>> raise RecordNotFoundError(
        ...     "No scenario found",
        ...     record_type="scenario",
        ...     record_id="scn-42",
        ... )
        RecordNotFoundError: No scenario found
    """

    def __init__(
        self,
        message: str,
        *,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.record_type = record_type
        self.record_id = record_id

        if record_type:
            self.details["record_type"] = record_type
        if record_id:
            self.details["record_id"] = record_id


class ConfigurationError(ThreeBucketsError):
    """Raised when engine settings are invalid or missing.

    Configuration errors are fatal and require administrator intervention.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Lending limit must be positive",
        ...     config_key="THREEBUCKETS_HECM_LENDING_LIMIT_CENTS",
        ...     expected="Positive integer cents",
        ...     actual=0,
        ... )
        ConfigurationError: Lending limit must be positive
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "ThreeBucketsError",
    "ValidationError",
    "RecordNotFoundError",
    "ConfigurationError",
]
