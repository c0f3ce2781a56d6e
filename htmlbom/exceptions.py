"""
Exception hierarchy for htmlbom.

Every error carries a short message plus optional context and suggestions,
which are folded into ``str(error)``::

    raise InvalidReferenceError("R1", footprint_id=3, footprint_count=2)

Only the two validation errors are raised by HTML generation; the importer
raises BoardImportError when a board cannot be read.
"""
from pathlib import Path
from typing import Any, Optional


class HtmlBomError(Exception):
    """
    Base exception for all htmlbom errors.

    Attributes:
        message: Short, stable description of the failure
        context: Dictionary of contextual information
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ValidationError(HtmlBomError):
    """The BOM document is inconsistent and cannot be rendered."""


class InvalidReferenceError(ValidationError):
    """A BOM row references a footprint ID that does not exist."""

    MESSAGE = "Invalid footprint ID."

    def __init__(self, reference: str, footprint_id: int, footprint_count: int):
        self.reference = reference
        self.footprint_id = footprint_id
        self.footprint_count = footprint_count
        super().__init__(
            self.MESSAGE,
            context={
                "reference": reference,
                "footprint_id": footprint_id,
                "footprint_count": footprint_count,
            },
            suggestions=["Use the ID returned by HtmlBom.add_footprint()"],
        )


class FieldCountMismatchError(ValidationError):
    """A footprint has a different number of field values than HtmlBom.fields."""

    MESSAGE = "Inconsistent number of fields."

    def __init__(self, footprint_id: int, expected: int, actual: int):
        self.footprint_id = footprint_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            self.MESSAGE,
            context={
                "footprint_id": footprint_id,
                "expected": expected,
                "actual": actual,
            },
            suggestions=["Provide exactly one value per entry of HtmlBom.fields"],
        )


class BoardImportError(HtmlBomError):
    """A KiCad board could not be loaded."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str | Path] = None,
        suggestions: Optional[list[str]] = None,
    ):
        context = {"file": str(file_path)} if file_path else None
        super().__init__(message, context, suggestions)
