from __future__ import annotations

import argparse
from pathlib import Path
import sys

from loguru import logger

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from challengebot.logging_setup import setup_logging
from challengebot.config import load_mail_config
from challengebot.errors import ProviderError
from challengebot.mail.developermail_http import DevelopermailHttpClient
from challengebot.mail.developermail_provider import DevelopermailProvider
from challengebot.mail.email_provider import Inbox, pick_latest
from challengebot.mail.utils import extract_verification_code, message_text


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Dump the newest message of a developermail.com mailbox")
    ap.add_argument("--name", required=True, help="Mailbox name (local part of the address)")
    ap.add_argument("--token", required=True, help="Mailbox token (X-MailboxToken)")
    ap.add_argument("--base-url", type=str, default=None, help="API base URL (overrides DEVELOPERMAIL_BASE_URL)")
    ap.add_argument("--raw", action="store_true", help="Print the raw message as well")
    return ap.parse_args()


def main() -> int:
    setup_logging()
    args = parse_args()
    cfg = load_mail_config()
    client = DevelopermailHttpClient(base_url=args.base_url or cfg.api_base_url, domain=cfg.domain)
    provider = DevelopermailProvider(client)
    inbox = Inbox(address=f"{args.name}@{cfg.domain}", name=args.name, token=args.token)

    try:
        messages = provider.list_messages(inbox)
    except ProviderError as exc:
        logger.error(f"Fetch failed: {exc}")
        return 1
    msg = pick_latest(messages)
    if msg is None:
        logger.warning(f"Mailbox {inbox.address} is empty")
        return 1

    logger.info(f"Messages: {len(messages)}, newest id={msg.id}")
    logger.info(f"Subject: {msg.subject}")
    logger.info(f"From: {msg.from_address}")
    logger.info(f"Date: {msg.received_at}")
    logger.info(f"Verification code: {extract_verification_code(message_text(msg))}")
    print("\n===== TEXT =====\n")
    print(msg.text_body or "<no text part>")
    print("\n===== HTML =====\n")
    print(msg.html_body or "<no html part>")
    if args.raw:
        print("\n===== RAW =====\n")
        print(client.get_message(inbox, msg.id))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
