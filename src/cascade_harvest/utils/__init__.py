# Utils package for cascade_harvest

from cascade_harvest.utils.exceptions import (
    BrowserError,
    BrowserLaunchError,
    BrowserNotFoundError,
    CascadeHarvestError,
    CatalogFetchError,
    CollectorStateError,
    ConnectionError,
    DataError,
    DropdownError,
    ElementNotFoundError,
    NetworkError,
    ReadinessTimeoutError,
    ScrapingError,
    TimeoutError,
    ValidationError,
    wrap_playwright_error,
)
from cascade_harvest.utils.responses import HarvestResult, OperationResult

__all__ = [
    "BrowserError",
    "BrowserLaunchError",
    "BrowserNotFoundError",
    # Exceptions
    "CascadeHarvestError",
    "CatalogFetchError",
    "CollectorStateError",
    "ConnectionError",
    "DataError",
    "DropdownError",
    "ElementNotFoundError",
    # Responses
    "HarvestResult",
    "NetworkError",
    "OperationResult",
    "ReadinessTimeoutError",
    "ScrapingError",
    "TimeoutError",
    "ValidationError",
    "wrap_playwright_error",
]
