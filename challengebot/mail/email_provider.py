from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol, Sequence
import time


@dataclass(frozen=True)
class Inbox:
    address: str
    name: str
    token: str


@dataclass(frozen=True)
class MailMessage:
    id: str
    subject: str
    from_address: str
    html_body: str | None
    text_body: str | None
    received_at: datetime | None = None


def pick_latest(messages: Sequence[MailMessage]) -> MailMessage | None:
    """Return the newest message.

    Dates are compared only when every message has one; otherwise the provider
    order is trusted and the first message is taken as the newest.
    """
    if not messages:
        return None
    dates = [m.received_at for m in messages]
    if all(d is not None for d in dates):
        try:
            return max(messages, key=lambda m: m.received_at)
        except TypeError:
            # naive and aware datetimes mixed
            pass
    return messages[0]


class EmailProvider(Protocol):
    """Abstract email provider capable of creating an inbox and fetching messages."""

    def create_inbox(self) -> Inbox:
        ...

    def list_messages(self, inbox: Inbox) -> list[MailMessage]:
        ...

    def wait_for_message(
        self,
        inbox: Inbox,
        match: Callable[[MailMessage], bool] | None = None,
        timeout_sec: float = 90,
        poll_interval_sec: float = 3.0,
        initial_delay_sec: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> MailMessage | None:
        """Poll the inbox until a message accepted by `match` shows up; `None` once the budget is spent.

        Without `match` any message ends the wait.
        """
        if initial_delay_sec > 0:
            sleep(initial_delay_sec)
        deadline = time.monotonic() + timeout_sec
        while True:
            matched = [msg for msg in self.list_messages(inbox) if match is None or match(msg)]
            if matched:
                return pick_latest(matched)
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            sleep(min(poll_interval_sec, remaining))
