"""ChemRisk Custom Exception Hierarchy.

The scoring engine itself never raises for well-typed input; the
exceptions below belong to the layers around it (configuration,
inventory validation, audit trail).

Exception Hierarchy:
    ChemRiskException (base)
    ├── ConfigurationError
    ├── InventoryValidationError
    └── ProvenanceError

All exceptions include rich context:
- error_code: Unique error identifier
- context: Dictionary with error-specific details
- timestamp: When the error occurred

Example:
    >>> from chemrisk.exceptions import InventoryValidationError
    >>> raise InventoryValidationError(
    ...     message="Inventory is not ready for assessment",
    ...     issues=[{"agent_id": "a1", "field": "quantity", "message": "must be > 0"}],
    ... )
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, List, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class ChemRiskException(Exception):
    """Base exception for all ChemRisk errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "CR_CONFIGURATION_ERROR")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "CR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize ChemRisk exception with rich context.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier (auto-generated if not provided)
            context: Dictionary with error-specific details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code based on exception class.

        Returns:
            Error code like "CR_INVENTORY_VALIDATION_ERROR"
        """
        class_name = self.__class__.__name__
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Concrete Exceptions
# ==============================================================================

class ConfigurationError(ChemRiskException, ValueError):
    """Configuration is invalid.

    Raised by ``InrsConfig`` when one or more settings are out of range.
    Subclasses ``ValueError`` so callers that only expect the builtin
    still catch it.

    Example:
        >>> raise ConfigurationError(
        ...     message="pareto_threshold must be in (0, 100]",
        ...     errors=["pareto_threshold must be in (0, 100], got 150.0"],
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        errors: Optional[List[str]] = None,
    ):
        if errors:
            context = context or {}
            context["errors"] = list(errors)
        super().__init__(message, context=context)


class InventoryValidationError(ChemRiskException):
    """An agent inventory is missing data the assessment form requires.

    Example:
        >>> raise InventoryValidationError(
        ...     message="Inventory is not ready for assessment",
        ...     issues=[{"agent_id": "a1", "field": "boiling_point",
        ...              "message": "boiling point is required for liquids"}],
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        issues: Optional[List[Dict[str, Any]]] = None,
    ):
        context = context or {}
        context["issues"] = list(issues or [])
        super().__init__(message, context=context)

    @property
    def issues(self) -> List[Dict[str, Any]]:
        """Issues that caused the validation failure."""
        return self.context["issues"]


class ProvenanceError(ChemRiskException):
    """A provenance record could not be created or exported."""


# ==============================================================================
# Utilities
# ==============================================================================

def format_exception_chain(exc: Exception) -> str:
    """Format an exception and its causes as a readable chain.

    Args:
        exc: Exception to format

    Returns:
        One line per exception, outermost first. ChemRisk exceptions
        with a context get an extra indented context line.
    """
    lines = []
    current: Optional[BaseException] = exc
    while current is not None:
        lines.append(f"{type(current).__name__}: {current}")
        if isinstance(current, ChemRiskException) and current.context:
            lines.append(f"  Context: {current.context}")
        current = current.__cause__ or current.__context__
    return "\n".join(lines)


__all__ = [
    "ChemRiskException",
    "ConfigurationError",
    "InventoryValidationError",
    "ProvenanceError",
    "format_exception_chain",
]
