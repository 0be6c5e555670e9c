"""
Exception classes for selector-ingest.

Provides rich error information with actionable suggestions. Only structural
failures are raised; row-level anomalies are repaired by the adapters.
"""

from typing import List, Optional, Dict, Any


class IngestError(Exception):
    """
    Base exception class for selector-ingest with rich error information.

    Provides structured error information including suggestions for resolution
    and links to relevant documentation.
    """

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        documentation_link: Optional[str] = None,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.suggestions = suggestions or []
        self.documentation_link = documentation_link
        self.error_code = error_code
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error message with suggestions."""
        message = super().__str__()

        if self.error_code:
            message = f"[{self.error_code}] {message}"

        if self.suggestions:
            message += "\n\nSuggestions:"
            for i, suggestion in enumerate(self.suggestions, 1):
                message += f"\n  {i}. {suggestion}"

        if self.documentation_link:
            message += f"\n\nDocumentation: {self.documentation_link}"

        return message


class FormatMismatchError(IngestError):
    """Raised when a file's detected format disagrees with the adapter's format."""

    def __init__(
        self,
        path: Optional[str] = None,
        detected_format: Optional[str] = None,
        expected_format: Optional[str] = None,
        **kwargs
    ):
        if detected_format and expected_format:
            message = (
                f"Require {expected_format} format, but '{path}' was detected "
                f"as {detected_format}"
            )
            suggestions = [
                f"Use the adapter registered for {detected_format} files",
                "Use selector_ingest.get_adapter() to pick the adapter from the file name",
                "Rename the file if its extension does not match its contents",
            ]
        else:
            message = f"Unsupported data format: {path}"
            suggestions = [
                "Supported extensions: .csv, .tsv, .txt (delimited) and .arff (binary matrix)",
                "Convert the file to one of the supported formats",
            ]

        kwargs.pop('suggestions', None)

        super().__init__(
            message=message,
            suggestions=suggestions,
            documentation_link="https://docs.selector-ingest.org/formats",
            error_code="FORMAT_MISMATCH",
            context={
                "path": path,
                "detected_format": detected_format,
                "expected_format": expected_format,
            },
            **kwargs
        )


class IOFailureError(IngestError):
    """Raised when the underlying source cannot be opened or read."""

    def __init__(self, path: Optional[str] = None, reason: Optional[Exception] = None, **kwargs):
        if reason is not None:
            message = f"Failed to read '{path}': {reason}"
        else:
            message = f"Failed to read '{path}'"

        kwargs.pop('suggestions', None)

        super().__init__(
            message=message,
            suggestions=[
                "Check file path and name",
                "Ensure file exists and is readable",
                "Check the configured encoding matches the file",
            ],
            documentation_link="https://docs.selector-ingest.org/formats",
            error_code="IO_FAILURE",
            context={"path": path, "reason": repr(reason) if reason else None},
            **kwargs
        )


class EmptySourceError(IngestError):
    """Raised when a source has no header line at all."""

    def __init__(self, path: Optional[str] = None, **kwargs):
        kwargs.pop('suggestions', None)

        super().__init__(
            message=f"Empty source, no header line found: {path}",
            suggestions=[
                "The first non-blank line must hold the attribute names",
                "Check the file was written completely",
            ],
            documentation_link="https://docs.selector-ingest.org/formats",
            error_code="EMPTY_SOURCE",
            context={"path": path},
            **kwargs
        )


class MissingStructuralSectionError(IngestError):
    """Raised when a required structural marker (e.g. '@data') is absent."""

    def __init__(self, path: Optional[str] = None, section: Optional[str] = None, **kwargs):
        kwargs.pop('suggestions', None)

        super().__init__(
            message=f"{section or 'Required'} section not found in '{path}'",
            suggestions=[
                f"Add a '{section}' line between the header and the data rows" if section
                else "Check the file header",
                "Ensure the header declarations are not commented out",
            ],
            documentation_link="https://docs.selector-ingest.org/formats",
            error_code="MISSING_SECTION",
            context={"path": path, "section": section},
            **kwargs
        )


class ConfigurationError(IngestError):
    """Exception raised for configuration and argument issues."""

    def __init__(self, config_key: Optional[str] = None, value: Any = None, **kwargs):
        if config_key:
            message = f"Invalid configuration for '{config_key}': {value!r}"
            suggestions = [
                f"Check the value for configuration key '{config_key}'",
                "Support thresholds must lie in [0, 1]",
                "Target attribute counts must be non-negative",
                "Delimiters must be a single character",
            ]
        else:
            message = "Configuration error"
            suggestions = [
                "Check configuration file syntax",
                "Review configuration documentation",
            ]

        kwargs.pop('suggestions', None)

        super().__init__(
            message=message,
            suggestions=suggestions,
            documentation_link="https://docs.selector-ingest.org/configuration",
            error_code="CONFIG",
            context={"config_key": config_key, "value": value},
            **kwargs
        )
