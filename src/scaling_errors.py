#!/usr/bin/env python3
"""
Error types for the quantity scaling engine.

Text content never produces an error: anything that fails to parse is
left as plain text. These exceptions are only raised at the boundaries
where a caller hands over configuration or a scale factor.
"""

from typing import Any, Dict, Optional


class QuantityScalingError(Exception):
    """Base exception for quantity scaling errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(QuantityScalingError):
    """Invalid scaling settings, raised once at load time."""


class ScaleFactorError(QuantityScalingError):
    """A scale factor that cannot be read as an exact rational."""
