from __future__ import annotations

import re
from email import message_from_string, policy
from email.utils import parsedate_to_datetime

from bs4 import BeautifulSoup

from .email_provider import MailMessage


VERIFICATION_CODE_RE = re.compile(r"Your verification code is:\s*(\w+)")


def extract_verification_code(text: str | None) -> str | None:
    """Return the code from the verification email text, or None when the phrase is absent."""
    m = VERIFICATION_CODE_RE.search(text or "")
    return m.group(1) if m else None


def html_to_text(raw: str) -> str:
    soup = BeautifulSoup(raw, "html.parser")
    return soup.get_text("\n", strip=False)


def message_text(msg: MailMessage) -> str:
    if msg.text_body and msg.text_body.strip():
        return msg.text_body
    if msg.html_body and msg.html_body.strip():
        return html_to_text(msg.html_body)
    return ""


def parse_raw_message(msg_id: str, raw: str) -> MailMessage:
    """Turn the raw RFC 822 text returned by the provider into a MailMessage.

    Transfer encodings are decoded. A payload that is not a MIME message is
    kept verbatim as the text body.
    """
    parsed = message_from_string(raw or "", policy=policy.default)

    text_parts: list[str] = []
    html_parts: list[str] = []
    for part in parsed.walk():
        if part.is_multipart():
            continue
        ctype = part.get_content_type()
        if ctype not in ("text/plain", "text/html"):
            continue
        try:
            content = part.get_content()
        except (LookupError, ValueError):
            payload = part.get_payload(decode=True) or b""
            content = payload.decode("utf-8", errors="replace")
        if not isinstance(content, str):
            continue
        (html_parts if ctype == "text/html" else text_parts).append(content)

    subject = str(parsed.get("Subject") or "")
    sender = str(parsed.get("From") or "")
    if not (subject or sender or text_parts or html_parts):
        # not a MIME message
        return MailMessage(id=msg_id, subject="", from_address="", html_body=None, text_body=raw)

    received_at = None
    date_header = parsed.get("Date")
    if date_header:
        try:
            received_at = parsedate_to_datetime(str(date_header))
        except (TypeError, ValueError):
            received_at = None

    return MailMessage(
        id=msg_id,
        subject=subject,
        from_address=sender,
        html_body="\n".join(html_parts) or None,
        text_body="\n".join(text_parts) or None,
        received_at=received_at,
    )
