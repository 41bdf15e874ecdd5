from __future__ import annotations


class ChallengeError(Exception):
    """Base class for every failure that ends a challenge run."""
    pass


class ConfigError(ChallengeError):
    """Raised when required settings are missing or malformed."""
    pass


class ProviderError(ChallengeError):
    """Raised when the disposable-mail API answers without a success flag."""
    pass


class ParseMissError(ChallengeError):
    """Raised when an expected element, attribute or text pattern is absent."""
    pass


class VerificationCodeNotFoundError(ParseMissError):
    """Raised when a verification email arrived but carries no code."""
    pass


class MailTimeoutError(ChallengeError):
    """Raised when no email arrived within the polling budget."""
    pass


class HTTPStatusError(ChallengeError):
    """Raised when a step-critical response is not HTTP 200."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class SolverError(ChallengeError):
    """Captcha service failure (e.g. account balance exhausted)."""

    def __init__(self, message: str, insufficient_balance: bool = False) -> None:
        super().__init__(message)
        self.insufficient_balance = insufficient_balance
