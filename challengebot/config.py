from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from challengebot.errors import ConfigError


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/58.0.3029.110 Safari/537.3"
)


@dataclass(frozen=True)
class ChallengeConfig:
    """Settings for the challenge site and the identity registered on it.

    - `base_url`: Site root; every endpoint path is joined onto it.
    - `fullname` / `password`: Fixed identity fields posted with the registration form.
    - `user_agent`: Sent with every request to the site.
    """
    base_url: str = "https://challenge.blackscale.media"
    fullname: str = "test"
    password: str = "12345678"
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout_sec: float = 30.0


@dataclass(frozen=True)
class MailConfig:
    """Disposable mailbox provider settings and the verification-mail poll budget."""
    api_base_url: str = "https://www.developermail.com/api/v1"
    domain: str = "developermail.com"
    initial_delay_sec: float = 3.0
    poll_interval_sec: float = 3.0
    timeout_sec: float = 90.0


@dataclass(frozen=True)
class SolverConfig:
    api_key: str
    timeout_sec: int = 180
    polling_interval_sec: int = 10


@dataclass(frozen=True)
class AppConfig:
    challenge: ChallengeConfig
    mail: MailConfig
    solver: SolverConfig
    log_dir: str | None = None


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


def _env_float(name: str, default: float, minimum: float = 0.0, strict: bool = False) -> float:
    """Read a number; `strict` rejects `minimum` itself (for intervals that must not be zero)."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value < minimum or (strict and value == minimum):
        bound = "greater than" if strict else "at least"
        raise ConfigError(f"{name} must be {bound} {minimum:g}, got {raw!r}")
    return value


def load_challenge_config() -> ChallengeConfig:
    load_dotenv(override=False)
    return ChallengeConfig(
        base_url=_env_str("CHALLENGE_BASE_URL", ChallengeConfig.base_url).rstrip("/"),
        fullname=_env_str("CHALLENGE_FULLNAME", ChallengeConfig.fullname),
        password=_env_str("CHALLENGE_PASSWORD", ChallengeConfig.password),
        user_agent=_env_str("CHALLENGE_USER_AGENT", ChallengeConfig.user_agent),
        http_timeout_sec=_env_float("CHALLENGE_HTTP_TIMEOUT_SEC", ChallengeConfig.http_timeout_sec, strict=True),
    )


def load_mail_config() -> MailConfig:
    load_dotenv(override=False)
    return MailConfig(
        api_base_url=_env_str("DEVELOPERMAIL_BASE_URL", MailConfig.api_base_url).rstrip("/"),
        domain=_env_str("DEVELOPERMAIL_DOMAIN", MailConfig.domain),
        initial_delay_sec=_env_float("MAIL_INITIAL_DELAY_SEC", MailConfig.initial_delay_sec),
        poll_interval_sec=_env_float("MAIL_POLL_INTERVAL_SEC", MailConfig.poll_interval_sec, strict=True),
        timeout_sec=_env_float("MAIL_TIMEOUT_SEC", MailConfig.timeout_sec),
    )


def load_solver_config() -> SolverConfig:
    load_dotenv(override=False)
    # The key is billable; it only ever comes from the environment or .env
    api_key = os.getenv("TWOCAPTCHA_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("TWOCAPTCHA_API_KEY is not set (environment or .env)")
    return SolverConfig(
        api_key=api_key,
        timeout_sec=int(_env_float("TWOCAPTCHA_TIMEOUT_SEC", SolverConfig.timeout_sec, minimum=1)),
        polling_interval_sec=int(_env_float("TWOCAPTCHA_POLLING_INTERVAL_SEC", SolverConfig.polling_interval_sec, minimum=1)),
    )


def load_config() -> AppConfig:
    return AppConfig(
        challenge=load_challenge_config(),
        mail=load_mail_config(),
        solver=load_solver_config(),
        log_dir=os.getenv("CHALLENGE_LOG_DIR", "").strip() or None,
    )
