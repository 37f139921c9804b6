"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External OAuth provider error."""

    pass


class MailDeliveryError(AdapterError):
    """Outbound mail could not be delivered."""

    pass
