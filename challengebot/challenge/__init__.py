"""Challenge site workflow.

Submodules:
 - forms: Hidden-field and reCAPTCHA site key extraction from HTML
 - site_client: Requests against the challenge site sharing one cookie session
 - captcha: 2Captcha adapter returning a typed solve result
 - flow: The end-to-end run, one stage after another
"""

__all__ = [
    "forms",
    "site_client",
    "captcha",
    "flow",
]
