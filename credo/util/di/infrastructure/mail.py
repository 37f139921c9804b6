"""Mail infrastructure providers."""

from dishka import Scope, provide

from credo.adapter.mail.smtp import SmtpMailSender
from credo.config import MailSettings
from credo.domain.service import MailSender
from credo.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mail_sender(self, mail_settings: MailSettings) -> MailSender:
        """Provide SMTP mail sender."""
        return SmtpMailSender(mail_settings)
