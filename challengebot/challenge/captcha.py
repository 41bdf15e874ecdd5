from __future__ import annotations

import time
from dataclasses import dataclass

from loguru import logger
from twocaptcha import TwoCaptcha
from twocaptcha import api as twocaptcha_api
from twocaptcha.solver import ApiException, NetworkException, TimeoutException, ValidationException

from challengebot.errors import SolverError


# Submit errors (ERROR_ZERO_BALANCE) come from the api module, polling errors from the solver module
_API_ERRORS = (ApiException, twocaptcha_api.ApiException)
_TRANSPORT_ERRORS = (NetworkException, TimeoutException, ValidationException, twocaptcha_api.NetworkException)


@dataclass(frozen=True)
class CaptchaChallenge:
    site_key: str
    page_url: str


@dataclass(frozen=True)
class CaptchaSolveResult:
    """Outcome of one solve request: a token, or the SolverError that prevented it."""
    success: bool
    token: str | None = None
    captcha_id: str | None = None
    error: SolverError | None = None
    solve_time_seconds: float = 0.0


def _is_balance_error(message: str) -> bool:
    # ERROR_ZERO_BALANCE and friends
    return "balance" in message.lower()


class RecaptchaSolver:
    """Blocking reCAPTCHA v2 solver backed by 2Captcha.

    Usage:
        solver = RecaptchaSolver(api_key="...")
        result = solver.solve(CaptchaChallenge(site_key, page_url))
        if result.success:
            # submit result.token
    """

    def __init__(
        self,
        api_key: str,
        timeout_sec: int = 180,
        polling_interval_sec: int = 10,
        client: TwoCaptcha | None = None,
    ) -> None:
        self.client = client or TwoCaptcha(
            api_key,
            recaptchaTimeout=timeout_sec,
            pollingInterval=polling_interval_sec,
        )

    def solve(self, challenge: CaptchaChallenge) -> CaptchaSolveResult:
        logger.info(f"Solving reCAPTCHA sitekey={challenge.site_key[:8]}… url={challenge.page_url}")
        start = time.monotonic()
        try:
            result = self.client.recaptcha(sitekey=challenge.site_key, url=challenge.page_url)
        except _API_ERRORS as exc:
            message = str(exc)
            return CaptchaSolveResult(
                success=False,
                error=SolverError(message, insufficient_balance=_is_balance_error(message)),
                solve_time_seconds=time.monotonic() - start,
            )
        except _TRANSPORT_ERRORS as exc:
            return CaptchaSolveResult(
                success=False,
                error=SolverError(f"{type(exc).__name__}: {exc}", insufficient_balance=False),
                solve_time_seconds=time.monotonic() - start,
            )
        elapsed = time.monotonic() - start

        token = result.get("code") if isinstance(result, dict) else None
        if not token:
            return CaptchaSolveResult(
                success=False,
                error=SolverError(f"2Captcha returned no token: {result!r}", insufficient_balance=False),
                solve_time_seconds=elapsed,
            )
        logger.info(f"reCAPTCHA solved in {elapsed:.1f}s")
        return CaptchaSolveResult(
            success=True,
            token=str(token),
            captcha_id=str(result.get("captchaId") or "") or None,
            solve_time_seconds=elapsed,
        )
