"""Configuration exceptions.

Raised for invalid match configuration: thresholds, rotation steps, masks
and reference/frame size mismatches.
"""

from .base_exceptions import RefmatchException


class ConfigurationError(RefmatchException):
    """Raised when a match configuration or its inputs are invalid."""

    def __init__(self, config_key: str, reason: str, **kwargs) -> None:
        """Initialize with configuration details."""
        super().__init__(
            f"Configuration error for '{config_key}': {reason}",
            error_code="CONFIGURATION_ERROR",
            context={"config_key": config_key, "reason": reason, **kwargs},
        )
        self.config_key = config_key
        self.reason = reason
