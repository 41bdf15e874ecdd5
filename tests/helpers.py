"""Shared HTML samples and fakes for the test suite."""

import json

import requests

from challengebot.mail.email_provider import EmailProvider, Inbox, MailMessage


REGISTER_HTML = """
<html><body>
<form method="post" action="verify.php">
  <input type="hidden" name="csrf" value="abc">
  <input type="hidden" name="ref" value="xyz">
  <input type="text" name="fullname">
  <input type="email" name="email">
  <input type="hidden" name="ref" value="final">
  <input type="password" name="password">
</form>
</body></html>
"""

CAPTCHA_HTML = """
<html><body>
<form method="post" action="complete.php">
  <div class="g-recaptcha" data-sitekey="SITE123"></div>
</form>
</body></html>
"""

VERIFICATION_MAIL = (
    "From: BlackScale <no-reply@blackscale.media>\r\n"
    "To: box1@developermail.com\r\n"
    "Subject: Verify your email\r\n"
    "Date: Mon, 19 Oct 2026 10:00:00 +0000\r\n"
    "Content-Type: text/plain; charset=utf-8\r\n"
    "\r\n"
    "Hello,\r\n"
    "Your verification code is: AB12CD\r\n"
)


def make_response(status=200, text="", json_data=None, url="https://example.test/"):
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.encoding = "utf-8"
    if json_data is not None:
        text = json.dumps(json_data)
    resp._content = text.encode("utf-8")
    return resp


class FakeProvider(EmailProvider):
    """In-memory mailbox.

    `messages` become visible after `deliver_after` list calls, `late_messages`
    after `late_after` calls.
    """

    def __init__(self, messages=None, deliver_after=0, late_messages=None, late_after=1):
        self.inbox = Inbox(address="box1@developermail.com", name="box1", token="tok")
        self.messages = list(messages or [])
        self.deliver_after = deliver_after
        self.late_messages = list(late_messages or [])
        self.late_after = late_after
        self.list_calls = 0

    def create_inbox(self):
        return self.inbox

    def list_messages(self, inbox):
        self.list_calls += 1
        visible = [] if self.list_calls <= self.deliver_after else list(self.messages)
        if self.list_calls > self.late_after:
            visible = self.late_messages + visible
        return visible


def mail(msg_id="m1", text="Your verification code is: AB12CD", subject="Verify", received_at=None):
    return MailMessage(
        id=msg_id,
        subject=subject,
        from_address="no-reply@blackscale.media",
        html_body=None,
        text_body=text,
        received_at=received_at,
    )

