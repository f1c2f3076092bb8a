"""
Error classification for proposal analysis.

Data quality errors are raised while adapting raw governance records into
models. Chain read errors are raised by collaborators and folded into
ReadResult failures at the read boundary. Configuration errors are raised
when merged configuration does not validate.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .chain_failures import ChainReadError
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # Collaborator Failures
    "ChainReadError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
]
