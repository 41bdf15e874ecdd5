from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Mapping

import requests
from loguru import logger

from challengebot.errors import HTTPStatusError
from .forms import parse_hidden_fields


@dataclass(frozen=True)
class Identity:
    fullname: str
    email: str
    password: str

    @property
    def email_signature(self) -> str:
        return base64.b64encode(self.email.encode("utf-8")).decode("ascii")

    def form_fields(self) -> dict[str, str]:
        return {
            "fullname": self.fullname,
            "email": self.email,
            "password": self.password,
            "email_signature": self.email_signature,
        }


def build_registration_payload(hidden_fields: Mapping[str, str], identity: Identity) -> dict[str, str]:
    """Hidden fields echoed back as-is, identity fields win on name clashes."""
    payload = dict(hidden_fields)
    payload.update(identity.form_fields())
    return payload


def new_session(user_agent: str) -> requests.Session:
    """Fresh cookie store for one challenge run."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    return session


class ChallengeSiteClient:
    """HTTP calls against the challenge site, all sharing one cookie session."""

    def __init__(self, base_url: str, session: requests.Session, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @property
    def captcha_page_url(self) -> str:
        return self.url("captcha.php")

    def _post_form(self, path: str, data: Mapping[str, str], referer: str) -> requests.Response:
        url = self.url(path)
        headers = {
            "Origin": self.base_url,
            "Referer": self.url(referer),
        }
        logger.debug(f"POST {url} fields={sorted(data)}")
        return self.session.post(url, data=dict(data), headers=headers, timeout=self.timeout)

    @staticmethod
    def _require_ok(resp: requests.Response) -> str:
        if resp.status_code != 200:
            raise HTTPStatusError(resp.status_code, resp.url)
        return resp.text

    def bootstrap(self) -> None:
        """GET / so the site sets its session cookies."""
        resp = self.session.get(self.url("/"), timeout=self.timeout)
        logger.debug(f"GET / -> HTTP {resp.status_code}, cookies={list(self.session.cookies.keys())}")

    def fetch_hidden_fields(self) -> dict[str, str]:
        resp = self.session.get(self.url("register.php"), timeout=self.timeout)
        return parse_hidden_fields(resp.text)

    def submit_registration(self, payload: Mapping[str, str]) -> requests.Response:
        # The response carries no usable success marker; the verification email is the confirmation
        resp = self._post_form("verify.php", payload, referer="register.php")
        logger.debug(f"POST verify.php -> HTTP {resp.status_code}")
        return resp

    def submit_verification_code(self, code: str) -> str:
        resp = self._post_form("captcha.php", {"code": code}, referer="verify.php")
        return self._require_ok(resp)

    def complete_challenge(self, captcha_token: str) -> str:
        resp = self._post_form("complete.php", {"g-recaptcha-response": captcha_token}, referer="captcha.php")
        return self._require_ok(resp)
