"""
Custom exceptions for cascade-harvest.

Exception hierarchy:

    CascadeHarvestError (base)
    ├── BrowserError
    │   ├── BrowserNotFoundError
    │   └── BrowserLaunchError
    ├── ScrapingError
    │   ├── ElementNotFoundError
    │   └── DropdownError
    ├── NetworkError
    │   ├── TimeoutError
    │   │   └── ReadinessTimeoutError
    │   └── ConnectionError
    ├── DataError
    │   └── ValidationError
    ├── CollectorStateError
    └── CatalogFetchError

Example:
    >>> try:
    ...     await page.goto(url, timeout=30000)
    ... except PlaywrightTimeoutError as e:
    ...     raise wrap_playwright_error(e, f"loading {url}") from e
"""

from __future__ import annotations


class CascadeHarvestError(Exception):
    """
    Base exception for the project.

    Every custom exception inherits from it so callers can catch
    project failures generically.
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# =============================================================================
# BROWSER ERRORS
# =============================================================================


class BrowserError(CascadeHarvestError):
    """Errors related to the Playwright browser."""

    pass


class BrowserNotFoundError(BrowserError):
    """No compatible Chrome/Edge/Chromium could be launched or reached."""

    def __init__(self, message: str = "No compatible browser found"):
        super().__init__(message)


class BrowserLaunchError(BrowserError):
    """
    Browser failed to start or the remote endpoint refused the connection.
    """

    pass


# =============================================================================
# SCRAPING ERRORS
# =============================================================================


class ScrapingError(CascadeHarvestError):
    """Errors while reading or driving the page."""

    pass


class ElementNotFoundError(ScrapingError):
    """
    Element not found in the document.

    Usually a markup change on the target site.
    """

    def __init__(self, selector: str, context: str = ""):
        message = f"Element not found: {selector}"
        if context:
            message += f" in {context}"
        super().__init__(message, details={"selector": selector})
        self.selector = selector


class DropdownError(ScrapingError):
    """Failure while selecting or harvesting a dropdown."""

    def __init__(self, dropdown_id: str, action: str, reason: str = ""):
        message = f"Dropdown '{dropdown_id}' failed to {action}"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={"dropdown_id": dropdown_id, "action": action})


# =============================================================================
# NETWORK / TIMING ERRORS
# =============================================================================


class NetworkError(CascadeHarvestError):
    """Network or timing related errors."""

    pass


class TimeoutError(NetworkError):
    """
    Operation exceeded its time budget.

    Not to be confused with builtins.TimeoutError.
    Use: from cascade_harvest.utils.exceptions import TimeoutError as HarvestTimeout
    """

    def __init__(self, operation: str, timeout_ms: int = 0):
        message = f"Timeout after {timeout_ms}ms in: {operation}"
        super().__init__(message, details={"operation": operation, "timeout_ms": timeout_ms})
        self.operation = operation
        self.timeout_ms = timeout_ms

    def __reduce__(self):
        """Support for pickle serialization."""
        return (self.__class__, (self.operation, self.timeout_ms))


class ReadinessTimeoutError(TimeoutError):
    """The awaited locator never matched within the allowed wait."""

    def __init__(self, locator: str, timeout_ms: int = 0):
        super().__init__(f"waiting for {locator}", timeout_ms)
        self.locator = locator

    def __reduce__(self):
        return (self.__class__, (self.locator, self.timeout_ms))


class ConnectionError(NetworkError):
    """
    Connection failure.

    Not to be confused with builtins.ConnectionError.
    """

    def __init__(self, url: str, reason: str = ""):
        message = f"Connection failed: {url}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, details={"url": url})
        self.url = url


# =============================================================================
# DATA ERRORS
# =============================================================================


class DataError(CascadeHarvestError):
    """Data/validation errors."""

    pass


class ValidationError(DataError):
    """Configuration or input value failed validation."""

    def __init__(self, field: str, value: str, expected: str = ""):
        message = f"Invalid value for '{field}': {value}"
        if expected:
            message += f" (expected: {expected})"
        super().__init__(message, details={"field": field, "value": value})


# =============================================================================
# ENUMERATION ERRORS
# =============================================================================


class CollectorStateError(CascadeHarvestError):
    """A collector was driven outside its Idle -> Processing -> Done lifecycle."""

    def __init__(self, state: str, action: str = "run"):
        super().__init__(f"Cannot {action} collector in state {state}", details={"state": state})
        self.state = state


class CatalogFetchError(CascadeHarvestError):
    """One or more catalogs failed to fetch; the rest were still saved."""

    def __init__(self, failures: dict[str, str]):
        names = ", ".join(failures)
        super().__init__(f"Failed to fetch catalogs: {names}", details={"failed": len(failures)})
        self.failures = failures


# =============================================================================
# HELPER: Playwright error conversion
# =============================================================================


def wrap_playwright_error(error: Exception, context: str = "") -> CascadeHarvestError:
    """
    Convert a Playwright exception into a project exception.

    Args:
        error: Original Playwright exception.
        context: Extra context for the message.

    Returns:
        The matching project exception.
    """
    error_str = str(error).lower()

    # Selector/locator before timeout: "locator timeout" is a missing element
    if "selector" in error_str or "locator" in error_str:
        return ElementNotFoundError(context or "unknown selector")
    if "timeout" in error_str:
        return TimeoutError(context or "Playwright operation", timeout_ms=0)
    if "net::" in error_str or "connection" in error_str:
        return ConnectionError(context or "unknown URL", str(error))

    return ScrapingError(f"{context}: {error}" if context else str(error))
