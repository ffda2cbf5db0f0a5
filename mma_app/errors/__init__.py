"""
Error classification for the market microstructure analytics package.

Expected absence of data is never an error: analytics return None or a
neutral value instead. These exceptions cover malformed input rejected at
the boundary and unexpected failures inside the metrics calculator.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    MissingDataError,
    TemporalDataError,
)
from .system_failures import (
    MetricsCalculationError,
    SystemFailureError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "MissingDataError",
    "TemporalDataError",
    # System Failures
    "SystemFailureError",
    "MetricsCalculationError",
]
