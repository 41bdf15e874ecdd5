"""Disposable mailbox handling.

Submodules:
 - email_provider: Common interfaces and models for email inbox providers
 - developermail_http: HTTP client for the developermail.com API
 - developermail_provider: EmailProvider on top of the HTTP client
 - utils: Raw message parsing and verification code extraction
"""

__all__ = [
    "email_provider",
    "developermail_http",
    "developermail_provider",
    "utils",
]
