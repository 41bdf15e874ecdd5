from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import requests
from loguru import logger

from challengebot.config import AppConfig
from challengebot.errors import ChallengeError, MailTimeoutError, ParseMissError, VerificationCodeNotFoundError
from challengebot.mail.developermail_http import DevelopermailHttpClient
from challengebot.mail.developermail_provider import DevelopermailProvider
from challengebot.mail.email_provider import EmailProvider, Inbox, MailMessage
from challengebot.mail.utils import extract_verification_code, message_text
from .captcha import CaptchaChallenge, RecaptchaSolver
from .forms import extract_site_key
from .site_client import ChallengeSiteClient, Identity, build_registration_payload, new_session


class ChallengeStage(str, Enum):
    MAILBOX = "mailbox"
    SESSION = "session"
    SCRAPE = "scrape"
    REGISTER = "register"
    MAIL = "mail"
    VERIFY = "verify"
    SOLVE = "solve"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ChallengeResult:
    ok: bool
    stage: ChallengeStage
    email: str | None = None
    final_html: str | None = None
    error: str | None = None
    insufficient_balance: bool = False

    @property
    def completed(self) -> bool:
        return self.ok and self.stage is ChallengeStage.COMPLETE

    @property
    def solver_failed(self) -> bool:
        return not self.ok and self.stage is ChallengeStage.SOLVE


def wait_for_verification_code(
    provider: EmailProvider,
    inbox: Inbox,
    timeout_sec: float,
    poll_interval_sec: float,
    initial_delay_sec: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """Poll the inbox until a message carrying a verification code arrives and return the code.

    Mails without a code do not end the wait. Once the budget is spent,
    MailTimeoutError is raised when the inbox stayed empty and
    VerificationCodeNotFoundError when mail arrived but none had a code.
    """
    seen: dict[str, MailMessage] = {}

    def has_code(msg: MailMessage) -> bool:
        seen[msg.id] = msg
        return extract_verification_code(message_text(msg)) is not None

    msg = provider.wait_for_message(
        inbox,
        match=has_code,
        timeout_sec=timeout_sec,
        poll_interval_sec=poll_interval_sec,
        initial_delay_sec=initial_delay_sec,
        sleep=sleep,
    )
    if msg is None:
        if not seen:
            raise MailTimeoutError(f"No email in {inbox.address} after {timeout_sec:.0f}s")
        subjects = ", ".join(f"{m.id} ({m.subject!r})" for m in seen.values())
        raise VerificationCodeNotFoundError(f"No verification code in {len(seen)} message(s) after {timeout_sec:.0f}s: {subjects}")
    return extract_verification_code(message_text(msg))


def run_challenge(
    config: AppConfig,
    provider: EmailProvider | None = None,
    solver: RecaptchaSolver | None = None,
    session: requests.Session | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ChallengeResult:
    """Run the whole challenge once. Every step runs at most once; the first failure ends the run."""
    cc, mc = config.challenge, config.mail
    if provider is None:
        provider = DevelopermailProvider(
            DevelopermailHttpClient(
                base_url=mc.api_base_url,
                domain=mc.domain,
                user_agent=cc.user_agent,
                timeout=cc.http_timeout_sec,
            )
        )
    if solver is None:
        solver = RecaptchaSolver(
            config.solver.api_key,
            timeout_sec=config.solver.timeout_sec,
            polling_interval_sec=config.solver.polling_interval_sec,
        )
    site = ChallengeSiteClient(cc.base_url, session or new_session(cc.user_agent), timeout=cc.http_timeout_sec)

    stage = ChallengeStage.MAILBOX
    email: str | None = None
    try:
        inbox = provider.create_inbox()
        email = inbox.address
        logger.info(f"Generated email: {email}")

        stage = ChallengeStage.SESSION
        site.bootstrap()
        logger.info("Initialized cookies")

        stage = ChallengeStage.SCRAPE
        hidden = site.fetch_hidden_fields()
        logger.info(f"Retrieved hidden form fields: {sorted(hidden)}")

        stage = ChallengeStage.REGISTER
        identity = Identity(fullname=cc.fullname, email=email, password=cc.password)
        payload = build_registration_payload(hidden, identity)
        logger.info("Prepared form data for registration")
        site.submit_registration(payload)
        logger.info("Sent registration request")

        stage = ChallengeStage.MAIL
        logger.info(f"Waiting for the verification email (up to {mc.timeout_sec:.0f}s)…")
        code = wait_for_verification_code(
            provider,
            inbox,
            timeout_sec=mc.timeout_sec,
            poll_interval_sec=mc.poll_interval_sec,
            initial_delay_sec=mc.initial_delay_sec,
            sleep=sleep,
        )
        logger.info(f"Retrieved verification code: {code}")

        stage = ChallengeStage.VERIFY
        html = site.submit_verification_code(code)
        logger.info("Sent verification code")
        site_key = extract_site_key(html)
        if site_key is None:
            logger.info("No reCAPTCHA on the verification response; nothing left to do")
            return ChallengeResult(ok=True, stage=stage, email=email)

        stage = ChallengeStage.SOLVE
        solved = solver.solve(CaptchaChallenge(site_key=site_key, page_url=site.captcha_page_url))
        if not solved.success:
            err = solved.error
            return ChallengeResult(
                ok=False,
                stage=stage,
                email=email,
                error=str(err) if err else "unknown solver error",
                insufficient_balance=bool(err and err.insufficient_balance),
            )

        stage = ChallengeStage.COMPLETE
        final_html = site.complete_challenge(solved.token)
        logger.info("Challenge completed successfully!")
        return ChallengeResult(ok=True, stage=stage, email=email, final_html=final_html)
    except (ParseMissError, MailTimeoutError) as exc:
        logger.warning(f"[{stage.value}] {exc}")
        return ChallengeResult(ok=False, stage=stage, email=email, error=f"{type(exc).__name__}: {exc}")
    except ChallengeError as exc:
        logger.error(f"[{stage.value}] {type(exc).__name__}: {exc}")
        return ChallengeResult(ok=False, stage=stage, email=email, error=f"{type(exc).__name__}: {exc}")
    except requests.RequestException as exc:
        logger.error(f"[{stage.value}] request failed: {type(exc).__name__}: {exc}")
        return ChallengeResult(ok=False, stage=stage, email=email, error=f"{type(exc).__name__}: {exc}")
