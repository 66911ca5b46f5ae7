import asyncio
from typing import Any, Awaitable, Callable, Dict, Iterable, List, NamedTuple, Optional

from pydantic import BaseModel

from quizmaster.exceptions import DeliveryError
from quizmaster.log import get_logger
from quizmaster.mail.aws_ses import MailTransport
from quizmaster.mail.templates import render_email

log = get_logger(__name__)


class Recipient(NamedTuple):
    id: int
    email: str
    username: str


class EmailResult(BaseModel):
    success: bool
    message_id: Optional[str] = None
    test_mode: bool = False
    error: Optional[str] = None


class BulkEmailResult(EmailResult):
    email: str
    username: str


class EmailDispatcher:
    """
    Renders named templates and hands them to the configured transport.

    Args:
        transport: MailTransport chosen at startup (see build_transport)
        frontend_url: Base URL used for links inside emails
        send_delay: Seconds to wait after each real send, to stay under
            the provider's rate limit
    """

    def __init__(self, transport: MailTransport, frontend_url: str, send_delay: float = 1.0):
        self.transport = transport
        self.frontend_url = frontend_url.rstrip("/")
        self.send_delay = send_delay

    @property
    def test_mode(self) -> bool:
        return self.transport.test_mode

    async def send_email(self, email: str, template: str, data: Dict[str, Any]) -> EmailResult:
        """
        Send one templated email.

        Returns:
            EmailResult: success=False with the error message when the
            transport fails; delivery errors are never raised.
        """
        subject, body_html = render_email(template, data, self.frontend_url)
        try:
            message_id = await self.transport.send(email, subject, body_html)
        except DeliveryError as e:
            log.error(f"Failed to send {template} email to {email}: {e}")
            return EmailResult(success=False, error=str(e))
        return EmailResult(success=True, message_id=message_id, test_mode=self.transport.test_mode)

    async def send_bulk_emails(
        self,
        recipients: Iterable[Recipient],
        template: str,
        get_data: Callable[[Recipient], Awaitable[Dict[str, Any]]],
    ) -> List[BulkEmailResult]:
        results = []
        for recipient in recipients:
            data = await get_data(recipient)
            result = await self.send_email(recipient.email, template, data)
            results.append(
                BulkEmailResult(email=recipient.email, username=recipient.username, **result.model_dump())
            )

            if not result.test_mode:
                await asyncio.sleep(self.send_delay)

        return results
