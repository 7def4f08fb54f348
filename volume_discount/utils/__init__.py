"""
Utility modules for the volume discount app.
"""
from .logging_config import setup_logging, get_logger
from .exceptions import (
    VolumeDiscountError,
    ValidationError,
    ConfigurationError
)
