"""Outbound mail interface."""


class MailSender:
    """Delivers plain-text mail. Implementations live in the adapter layer."""

    async def send(self, to: str, subject: str, body: str) -> None:
        """Send a message.

        Args:
            to: Recipient address
            subject: Subject line
            body: Plain-text body

        Raises:
            MailDeliveryError: If delivery fails
        """
        raise NotImplementedError
