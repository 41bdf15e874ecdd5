import pytest

from challengebot import config as config_mod
from challengebot.config import load_challenge_config, load_config, load_mail_config, load_solver_config
from challengebot.errors import ConfigError


ENV_VARS = [
    "TWOCAPTCHA_API_KEY",
    "TWOCAPTCHA_TIMEOUT_SEC",
    "TWOCAPTCHA_POLLING_INTERVAL_SEC",
    "CHALLENGE_BASE_URL",
    "CHALLENGE_FULLNAME",
    "CHALLENGE_PASSWORD",
    "CHALLENGE_USER_AGENT",
    "CHALLENGE_HTTP_TIMEOUT_SEC",
    "CHALLENGE_LOG_DIR",
    "DEVELOPERMAIL_BASE_URL",
    "DEVELOPERMAIL_DOMAIN",
    "MAIL_INITIAL_DELAY_SEC",
    "MAIL_POLL_INTERVAL_SEC",
    "MAIL_TIMEOUT_SEC",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config_mod, "load_dotenv", lambda **kwargs: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cc = load_challenge_config()
    mc = load_mail_config()
    assert cc.base_url == "https://challenge.blackscale.media"
    assert cc.fullname == "test"
    assert cc.password == "12345678"
    assert mc.api_base_url == "https://www.developermail.com/api/v1"
    assert mc.domain == "developermail.com"
    assert mc.timeout_sec > mc.poll_interval_sec > 0


def test_overrides(monkeypatch):
    monkeypatch.setenv("CHALLENGE_BASE_URL", "https://staging.test/")
    monkeypatch.setenv("MAIL_TIMEOUT_SEC", "15")
    monkeypatch.setenv("TWOCAPTCHA_API_KEY", "  secret ")
    monkeypatch.setenv("TWOCAPTCHA_TIMEOUT_SEC", "240")
    monkeypatch.setenv("CHALLENGE_LOG_DIR", "logs")
    cfg = load_config()
    assert cfg.challenge.base_url == "https://staging.test"
    assert cfg.mail.timeout_sec == 15.0
    assert cfg.solver.api_key == "secret"
    assert cfg.solver.timeout_sec == 240
    assert cfg.log_dir == "logs"


def test_missing_solver_key():
    with pytest.raises(ConfigError, match="TWOCAPTCHA_API_KEY"):
        load_solver_config()


def test_bad_number(monkeypatch):
    monkeypatch.setenv("MAIL_POLL_INTERVAL_SEC", "soon")
    with pytest.raises(ConfigError, match="MAIL_POLL_INTERVAL_SEC"):
        load_mail_config()


def test_negative_number(monkeypatch):
    monkeypatch.setenv("CHALLENGE_HTTP_TIMEOUT_SEC", "-1")
    with pytest.raises(ConfigError):
        load_challenge_config()


@pytest.mark.parametrize("value", ["0", "0.0"])
def test_zero_mail_poll_interval_rejected(monkeypatch, value):
    monkeypatch.setenv("MAIL_POLL_INTERVAL_SEC", value)
    with pytest.raises(ConfigError, match="MAIL_POLL_INTERVAL_SEC"):
        load_mail_config()


def test_fractional_mail_poll_interval_allowed(monkeypatch):
    monkeypatch.setenv("MAIL_POLL_INTERVAL_SEC", "0.5")
    assert load_mail_config().poll_interval_sec == 0.5


@pytest.mark.parametrize("value", ["0", "0.5"])
def test_solver_polling_interval_below_one_second_rejected(monkeypatch, value):
    monkeypatch.setenv("TWOCAPTCHA_API_KEY", "secret")
    monkeypatch.setenv("TWOCAPTCHA_POLLING_INTERVAL_SEC", value)
    with pytest.raises(ConfigError, match="TWOCAPTCHA_POLLING_INTERVAL_SEC"):
        load_solver_config()


def test_solver_polling_interval_of_one_second(monkeypatch):
    monkeypatch.setenv("TWOCAPTCHA_API_KEY", "secret")
    monkeypatch.setenv("TWOCAPTCHA_POLLING_INTERVAL_SEC", "1")
    assert load_solver_config().polling_interval_sec == 1
