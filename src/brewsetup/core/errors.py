"""Module defining custom exceptions for the brewsetup catalog."""

from __future__ import annotations

from typing import Any, Self

# Exit Codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_TRANSIENT_ERROR = 3


class BrewSetupError(Exception):
    """Base exception class with context propagation.

    All exceptions in brewsetup should inherit from this class.
    Context is a dictionary that accumulates relevant information
    as the exception propagates up the call stack.

    Example:
        raise BrewSetupError("An error occurred", context={"source": "cask"})

        # Or with context propagation
        try:
            ...
        except BrewSetupError as e:
            raise e.with_context(operation="refresh")
    """
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **new_context: Any) -> Self:
        """Returns the exception with updated context.

        Args:
            **new_context: Additional context to add to the exception.

        Returns:
            The same instance with merged context.
        """
        self.context.update(new_context)
        return self

    def __str__(self) -> str:
        """String representation of the exception including context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class TransientError(BrewSetupError):
    """Errors caused by temporary conditions.

    These errors are typically due to network issues or registry
    outages. The fetcher degrades them to stale or empty data.
    """
    pass


class UserError(BrewSetupError):
    """Errors caused by user actions or inputs.

    These errors indicate that the user has made a mistake or provided
    invalid input, and should not be retried without correction.
    """
    pass


class SystemError(BrewSetupError):
    """Errors due to system-level issues.

    These errors indicate problems with the environment or with data the
    engine cannot make sense of.
    """
    pass


## Specific Exceptions ##

class RegistryHTTPError(TransientError):
    """Registry endpoint answered with a non-success status.

    Typically indicates:
        - Registry outages
        - Rate limiting
        - A moved endpoint
    """
    def __init__(
        self,
        message: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        """Initialise RegistryHTTPError with detailed context.

        Args:
            message: Optional custom error message.
            url: The endpoint that was requested.
            status_code: The HTTP status returned.
            context: Additional context information.
        """
        ctx = context or {}
        if url:
            ctx["url"] = url
        if status_code is not None:
            ctx["status_code"] = status_code

        if message is None:
            message = f"Registry request failed with status {status_code or 'unknown'}"

        super().__init__(message, context=ctx)


class RegistryTimeoutError(TransientError):
    """Registry request did not complete in time."""
    def __init__(
        self,
        message: str | None = None,
        url: str | None = None,
        timeout: float | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        if timeout is not None:
            ctx["timeout"] = timeout

        if message is None:
            message = f"Registry request timed out after {timeout or 'unknown'}s"

        super().__init__(message, context=ctx)


class RegistryPayloadError(TransientError):
    """Registry answered with a body that is not a JSON list of records."""
    pass


class MalformedRecordError(SystemError):
    """A single registry record could not be normalized.

    Raised by the normalizers and caught per record: the record is
    dropped and the rest of the batch continues.
    """
    def __init__(
        self,
        message: str | None = None,
        kind: str | None = None,
        record: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if kind:
            ctx["kind"] = kind
        if record:
            ctx["record"] = record

        if message is None:
            message = f"Malformed {kind or 'registry'} record"

        super().__init__(message, context=ctx)


class ToolNotFoundError(UserError):
    """Requested tool was not found in the catalog.

    This is UserError - do not retry without changing the tool name.
    """
    def __init__(
        self,
        message: str | None = None,
        tool: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        """Initialise ToolNotFoundError with detailed context.

        Args:
            message: Optional custom error message.
            tool: The name of the tool that was not found.
            context: Additional context information.
        """
        ctx = context or {}
        if tool:
            ctx["tool"] = tool

        if message is None:
            message = f"Tool '{tool or 'unknown'}' not found"

        super().__init__(message, context=ctx)


class UnknownCategoryError(UserError):
    """Requested category does not exist."""
    def __init__(
        self,
        message: str | None = None,
        category: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if category:
            ctx["category"] = category

        if message is None:
            message = f"Unknown category '{category or ''}'"

        super().__init__(message, context=ctx)


# CLI Error Message Templates

ERROR_TEMPLATES = {
    ToolNotFoundError: (
        "❌ Tool Not Found: {tool}\n"
        "   Suggestion: Try 'brewsetup search {tool}' to find similar tools"
    ),
    UnknownCategoryError: (
        "❌ Unknown category: {category}\n"
        "   Run 'brewsetup browse --help' to list the available categories"
    ),
    RegistryTimeoutError: (
        "⚠️ Registry request timed out after {timeout}s: {url}\n"
        "   The operation took too long - this may be due to network issues"
    ),
    RegistryHTTPError: (
        "⚠️ Registry request failed: {url}\n"
        "   Status: {status_code}"
    ),
    TransientError: (
        "⚠️ Temporary failure: {message}\n"
        "   This may resolve itself - try again in a moment"
    ),
    UserError: (
        "❌ {message}"
    ),
    SystemError: (
        "⚠️ System error: {message}\n"
        "   Please check your system configuration and try again"
    ),
    BrewSetupError: (
        "❌ {message}"
    ),
}

def format_error_message(error: BrewSetupError) -> str:
    """Formats an error message for CLI display based on the error type.

    Args:
        error: The BrewSetupError instance to format.

    Returns:
        A formatted string message for CLI display.
    """
    template = ERROR_TEMPLATES.get(type(error), ERROR_TEMPLATES[BrewSetupError])
    try:
        return template.format(message=error.message, **getattr(error, "context", {}))
    except KeyError:
        return f"❌ {error.message}"

def suggest_search(tool_name: str) -> str:
    """Suggest a search command for a missing tool.

    Args:
        tool_name: The name of the missing tool.

    Returns:
        Formatted search suggestion string.
    """
    return (
        f"\n💡 Suggestions:\n"
        f"   • Try 'brewsetup search {tool_name}'\n"
        "   • Check for spelling and try again\n"
        "   • Visit https://formulae.brew.sh/ to browse available packages\n"
    )
