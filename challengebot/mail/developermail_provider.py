from __future__ import annotations

from loguru import logger

from .developermail_http import DevelopermailHttpClient
from .email_provider import EmailProvider, Inbox, MailMessage
from .utils import parse_raw_message


class DevelopermailProvider(EmailProvider):
    def __init__(self, client: DevelopermailHttpClient | None = None) -> None:
        self.client = client or DevelopermailHttpClient()

    def create_inbox(self) -> Inbox:
        inbox = self.client.create_mailbox()
        logger.debug(f"Mailbox created: {inbox.address}")
        return inbox

    def list_messages(self, inbox: Inbox) -> list[MailMessage]:
        messages = []
        for msg_id in self.client.list_message_ids(inbox):
            raw = self.client.get_message(inbox, msg_id)
            messages.append(parse_raw_message(msg_id, raw))
        return messages
