"""Infrastructure layer errors."""

from enroll.domain.error import ExternalServiceError


class AdapterError(ExternalServiceError):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class MediaServerError(ProviderError):
    """Media server account service error."""

    pass


class CompanionError(ProviderError):
    """Companion request service error."""

    pass


class EmailDeliveryError(ProviderError):
    """Mail transport error."""

    pass


class ChatDeliveryError(ProviderError):
    """Chat bot transport error."""

    pass
