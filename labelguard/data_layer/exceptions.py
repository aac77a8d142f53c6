"""Structured error types for labelguard.

Analysis itself never raises for empty, unknown or absent input. These
errors cover the edges around it: a broken ingredient registry, a settings
file that cannot be used, and product payloads that are not records at all.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes, string-valued for serialization and logging."""

    REGISTRY_INVALID = "REGISTRY_INVALID"
    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_PRODUCT_DATA = "INVALID_PRODUCT_DATA"


class LabelGuardError(Exception):
    """Base exception for all labelguard errors.

    Attributes:
        code: ErrorCode identifying the error type
        message: Human-readable error description
        context: Dictionary of relevant error context (file path, key, etc.)
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(f"[{code.value}] {message}")

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
        }


class RegistryError(LabelGuardError):
    """Raised when the ingredient risk registry file is malformed.

    This is a configuration defect and surfaces at load time, never
    during an analysis.
    """

    def __init__(self, message: str, source: Optional[str] = None, **context: Any):
        if source is not None:
            context["source"] = source
        super().__init__(ErrorCode.REGISTRY_INVALID, message, context)


class ConfigError(LabelGuardError):
    """Raised when a settings file has unknown keys or wrongly typed values."""

    def __init__(self, message: str, path: Optional[str] = None, **context: Any):
        if path is not None:
            context["path"] = path
        super().__init__(ErrorCode.CONFIG_INVALID, message, context)


class ProductDataError(LabelGuardError):
    """Raised when a product-lookup payload is not a usable record."""

    def __init__(self, message: str, **context: Any):
        super().__init__(ErrorCode.INVALID_PRODUCT_DATA, message, context)
