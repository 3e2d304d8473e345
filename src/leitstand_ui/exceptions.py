"""
Leitstand UI Exception Classes

Structured error classes with reason codes, contextual messages, and suggestions.
"""

from enum import Enum
from typing import List, Optional


class ReasonCode(Enum):
    """Reason codes for Leitstand UI errors and log messages."""

    # Module descriptors and contributions (UIM)
    UIM0001E_CANNOT_PROCESS_MODULE_DESCRIPTOR = "UIM0001E"
    UIM0002E_CANNOT_PROCESS_MODULE_EXTENSION = "UIM0002E"
    UIM0003I_MODULE_DESCRIPTOR_LOADED = "UIM0003I"
    UIM0004I_MODULE_EXTENSION_LOADED = "UIM0004I"

    # Dictionaries and tags (LUI)
    LUI0001E_DICTIONARY_NOT_FOUND = "LUI0001E"
    LUI0002I_DICTIONARY_STORED = "LUI0002I"
    LUI0003I_DICTIONARY_REMOVED = "LUI0003I"
    LUI0010I_TAG_NOT_FOUND = "LUI0010I"

    # Request validation (VAL)
    VAL0001E_INVALID_VALUE = "VAL0001E"
    VAL0003E_IMMUTABLE_ATTRIBUTE = "VAL0003E"


class LeitstandError(Exception):
    """
    Base exception for Leitstand UI errors.

    All Leitstand UI exceptions include:
    - Reason code for searchability
    - Contextual error message
    - Suggested actions to resolve

    Example:
        raise LeitstandError(
            message="Cannot process module descriptor for module 'inventory'",
            code=ReasonCode.UIM0001E_CANNOT_PROCESS_MODULE_DESCRIPTOR,
            suggestions=["Check the YAML syntax of ui/modules/inventory/module.yaml"],
        )
    """

    def __init__(
        self,
        message: str,
        code: ReasonCode,
        suggestions: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        """
        Initialize LeitstandError.

        Args:
            message: Clear description of what went wrong
            code: Reason code from ReasonCode enum
            suggestions: List of suggested actions to resolve the error
            cause: Original exception that caused this error (if wrapping)
        """
        self.code = code
        self.message = message
        self.suggestions = suggestions or []
        self.cause = cause

        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format error message with reason code, suggestions, and cause."""

        lines = [
            f"{self.__class__.__name__} ({self.code.value}): {message}",
        ]

        if self.suggestions:
            lines.append("")
            lines.append("Suggested actions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                lines.append(f"  {i}. {suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {str(self.cause)}")

        return "\n".join(lines)


class ModuleDescriptorError(LeitstandError):
    """Raised when a module descriptor or the main menu cannot be processed."""

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            code=ReasonCode.UIM0001E_CANNOT_PROCESS_MODULE_DESCRIPTOR,
            suggestions=suggestions,
            cause=cause,
        )


class ContributionError(LeitstandError):
    """Raised when a contribution descriptor cannot be processed."""

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            code=ReasonCode.UIM0002E_CANNOT_PROCESS_MODULE_EXTENSION,
            suggestions=suggestions,
            cause=cause,
        )


class EntityNotFoundError(LeitstandError):
    """Raised when a requested dictionary or tag does not exist."""

    def __init__(self, message: str, code: ReasonCode):
        super().__init__(message=message, code=code)


class UnprocessableEntityError(LeitstandError):
    """Raised when a request carries a value that cannot be processed."""

    def __init__(
        self,
        message: str,
        code: ReasonCode = ReasonCode.VAL0003E_IMMUTABLE_ATTRIBUTE,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(
            message=message,
            code=code,
            suggestions=suggestions,
        )
