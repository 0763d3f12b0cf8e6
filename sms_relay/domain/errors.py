"""Domain errors."""


class RelayError(Exception):
    """Base class for relay errors."""


class ConfigurationError(RelayError):
    """Raised when required configuration is missing."""


class DeliveryError(RelayError):
    """Raised when the messaging provider rejects an outbound message."""

    def __init__(self, message: str, to: str = "") -> None:
        super().__init__(message)
        self.to = to


class AssistantBackendError(RelayError):
    """Raised when a call to the assistant backend fails."""
