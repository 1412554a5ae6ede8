"""
Exceptions raised by the location services.
"""


class ImportFileError(Exception):
    """Raised when an uploaded file cannot be imported at all."""


class RowSkipped(Exception):
    """
    Raised when a single import row fails validation.

    The message is the human-readable skip reason reported back to the caller.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class GeocodingError(Exception):
    """Base class for geocoding failures that are not provider answers."""


class GeocodingConfigurationError(GeocodingError):
    """Raised when no provider API key is configured."""


class GeocodingProviderError(GeocodingError):
    """Raised when the provider cannot be reached or answers with an HTTP error."""
