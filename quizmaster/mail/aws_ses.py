import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from quizmaster.config import Settings
from quizmaster.exceptions import DeliveryError
from quizmaster.log import get_logger

log = get_logger(__name__)

# Constants
CHARSET = "UTF-8"
TEST_MODE_MESSAGE_ID = "test-mode"


class MailTransport:
    """Delivers one rendered message. Returns the provider message id."""

    test_mode = False

    async def send(self, email: str, subject: str, body_html: str) -> str:
        raise NotImplementedError


class SesTransport(MailTransport):
    def __init__(self, client, sender: str):
        self.client = client
        self.sender = sender

    def _send_email(self, email: str, subject: str, body_html: str) -> str:
        try:
            response = self.client.send_email(
                Destination={'ToAddresses': [email]},
                Message={
                    'Body': {
                        'Html': {
                            'Charset': CHARSET,
                            'Data': body_html,
                        },
                    },
                    'Subject': {
                        'Charset': CHARSET,
                        'Data': subject,
                    },
                },
                Source=self.sender,
            )
        except ClientError as e:
            raise DeliveryError(e.response['Error']['Message']) from e
        except BotoCoreError as e:
            raise DeliveryError(str(e)) from e
        return response['MessageId']

    async def send(self, email: str, subject: str, body_html: str) -> str:
        # boto3 is blocking; sends are still awaited one at a time
        message_id = await asyncio.to_thread(self._send_email, email, subject, body_html)
        log.info(f"Email sent successfully to {email}: {message_id}")
        return message_id


class NoopTransport(MailTransport):
    test_mode = True

    async def send(self, email: str, subject: str, body_html: str) -> str:
        log.warning(f"Email configuration missing - would send '{subject}' to {email}")
        return TEST_MODE_MESSAGE_ID


def _get_ses_client(_settings: Settings):
    """Create and return an AWS SES client."""
    return boto3.client(
        'ses',
        region_name=_settings.AWS_DEFAULT_REGION,
        aws_access_key_id=_settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=_settings.AWS_SECRET_ACCESS_KEY,
    )


def build_transport(_settings: Settings) -> MailTransport:
    """
    Pick the mail transport once at startup.

    Without both AWS keys there is nothing to deliver with, so every send
    goes through NoopTransport and reports test mode.
    """
    if not _settings.AWS_ACCESS_KEY_ID or not _settings.AWS_SECRET_ACCESS_KEY:
        log.warning("AWS credentials not configured, email delivery runs in test mode")
        return NoopTransport()
    return SesTransport(_get_ses_client(_settings), sender=_settings.EMAIL_SENDER)
