"""错误基类：为重排序节点提供分层错误体系和结构化错误上下文。

Base error classes for ollama-rerank.

Provides a layered error hierarchy:
- RerankError: Base class for all package errors
- NetworkError: Connection failures reaching the model server
- HttpStatusError: Non-2xx responses from the model server
- SchemaError: JSON bodies missing expected fields
- ParseError: Model output that cannot be turned into a ranking
- ConfigurationError: Invalid node parameters or variant selection
- ManifestError: Variant manifest loading/validation errors
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorContext:
    """Structured error context for diagnostics.

    Provides actionable information for debugging and error handling.
    """

    field_path: str | None = None
    """Path to the problematic field (e.g., 'models[0].name')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'transport', 'parser', 'node')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class RerankError(Exception):
    """Base class for all ollama-rerank errors.

    All errors from this package inherit from this class, so a host can
    catch every operational failure with a single except clause.

    Attributes:
        message: Human-readable error message
        context: Structured error context
        item_index: Index of the workflow item being processed, if known
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        item_index: int | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        self.item_index = item_index
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> RerankError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self

    def for_item(self, item_index: int) -> RerankError:
        """Attach the workflow item index unless one is already set."""
        if self.item_index is None:
            self.item_index = item_index
        return self


class NetworkError(RerankError):
    """Connection failure reaching the model server.

    Raised when:
    - The host refuses or drops the connection
    - DNS resolution fails
    - A configured timeout expires
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        cause: Exception | None = None,
        item_index: int | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        if url:
            ctx.details["url"] = url
        super().__init__(message, ctx, item_index=item_index)
        self.url = url
        self.__cause__ = cause


class HttpStatusError(RerankError):
    """Non-success HTTP status returned by the model server."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        status_code: int,
        reason: str | None = None,
        body: Any = None,
        item_index: int | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="remote")
        ctx.details["status_code"] = status_code
        if url:
            ctx.details["url"] = url
        super().__init__(message, ctx, item_index=item_index)
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body


class SchemaError(RerankError):
    """A JSON body is missing an expected field or has the wrong shape."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        field: str | None = None,
        item_index: int | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="schema")
        if field:
            ctx.field_path = field
        super().__init__(message, ctx, item_index=item_index)
        self.field = field


class ParseError(RerankError):
    """Unstructured model output could not be turned into a ranking.

    Raised when:
    - No bracketed JSON array is present in the reply
    - The extracted text is not valid JSON
    - Entries are malformed or point outside the document list
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        raw_text: str | None = None,
        item_index: int | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="parser")
        super().__init__(message, ctx, item_index=item_index)
        self.raw_text = raw_text


class ConfigurationError(RerankError):
    """Invalid node parameters, credentials or variant selection."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        parameter: str | None = None,
        item_index: int | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="node")
        if parameter:
            ctx.field_path = parameter
        super().__init__(message, ctx, item_index=item_index)
        self.parameter = parameter


class ManifestError(RerankError):
    """Error while loading or validating a variant manifest."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        manifest_path: str | None = None,
        variant: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="protocol")
        if manifest_path:
            ctx.details["manifest_path"] = manifest_path
        if variant:
            ctx.details["variant"] = variant
        super().__init__(message, ctx)
        self.manifest_path = manifest_path
        self.variant = variant
