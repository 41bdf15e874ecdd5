from __future__ import annotations

from typing import Any

import requests
from loguru import logger

from challengebot.errors import ProviderError
from .email_provider import Inbox


class DevelopermailHttpClient:
    """Thin HTTP client for the developermail.com disposable mailbox API.

    Every endpoint answers with `{"success": bool, "result": ...}`; a missing or
    false `success` is turned into ProviderError.
    """

    def __init__(
        self,
        base_url: str = "https://www.developermail.com/api/v1",
        domain: str = "developermail.com",
        user_agent: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.domain = domain
        self.user_agent = user_agent
        self.timeout = timeout
        self._session = session or requests.Session()

    def _headers(self, token: str | None = None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        if token:
            headers["X-MailboxToken"] = token
        return headers

    def _request(self, method: str, path: str, token: str | None = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        resp = self._session.request(method, url, headers=self._headers(token), timeout=self.timeout)
        try:
            data = resp.json()
        except ValueError:
            raise ProviderError(f"{method} {path}: HTTP {resp.status_code}, non-JSON body: {resp.text[:200]}") from None
        if not isinstance(data, dict) or not data.get("success"):
            errors = data.get("errors") if isinstance(data, dict) else None
            raise ProviderError(f"{method} {path}: provider reported no success (HTTP {resp.status_code}, errors={errors})")
        return data.get("result")

    def create_mailbox(self) -> Inbox:
        """PUT /mailbox: allocate a new mailbox and its access token."""
        result = self._request("PUT", "/mailbox")
        if not isinstance(result, dict) or not result.get("name") or not result.get("token"):
            raise ProviderError(f"PUT /mailbox: malformed result {result!r}")
        name = str(result["name"])
        return Inbox(address=f"{name}@{self.domain}", name=name, token=str(result["token"]))

    def list_message_ids(self, inbox: Inbox) -> list[str]:
        result = self._request("GET", f"/mailbox/{inbox.name}", token=inbox.token)
        if not result:
            return []
        if not isinstance(result, list):
            raise ProviderError(f"GET /mailbox/{inbox.name}: expected a list of ids, got {type(result).__name__}")
        return [str(x) for x in result]

    def get_message(self, inbox: Inbox, msg_id: str) -> str:
        """GET /mailbox/{name}/messages/{id}: raw message text."""
        result = self._request("GET", f"/mailbox/{inbox.name}/messages/{msg_id}", token=inbox.token)
        if not isinstance(result, str):
            raise ProviderError(f"message {msg_id}: expected raw text, got {type(result).__name__}")
        return result
