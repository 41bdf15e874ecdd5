from __future__ import annotations

from bs4 import BeautifulSoup


def _soup(html: str) -> BeautifulSoup:
    # html.parser never raises on broken markup, it just builds what it can
    return BeautifulSoup(html or "", "html.parser")


def parse_hidden_fields(html: str) -> dict[str, str]:
    """Collect name/value pairs of every `<input type="hidden">` in document order.

    A later input with the same name overwrites an earlier one. Inputs without
    a name are skipped since a browser would not submit them either.
    """
    fields: dict[str, str] = {}
    for inp in _soup(html).find_all("input"):
        if (inp.get("type") or "").strip().lower() != "hidden":
            continue
        name = inp.get("name")
        if not name:
            continue
        fields[name] = inp.get("value") or ""
    return fields


def extract_site_key(html: str) -> str | None:
    """Return `data-sitekey` of the first `.g-recaptcha` element, if any."""
    node = _soup(html).find(class_="g-recaptcha")
    if node is None:
        return None
    key = node.get("data-sitekey")
    if isinstance(key, list):
        key = " ".join(key)
    if not key or not key.strip():
        return None
    return key.strip()
