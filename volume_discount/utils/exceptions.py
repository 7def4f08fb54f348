"""
Custom exceptions for volume discount logic.

The discount function itself never raises; these are used by the admin side
(configuration builder, CLI) where invalid merchant input must be reported.
"""


class VolumeDiscountError(Exception):
    """Base exception for all volume discount errors."""

    def __init__(self, message: str, code: str = "VOLUME_DISCOUNT_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(VolumeDiscountError):
    """Invalid input data."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"INVALID_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)


class ConfigurationError(VolumeDiscountError):
    """Application configuration error."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")
