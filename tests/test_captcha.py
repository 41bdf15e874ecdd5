from unittest.mock import MagicMock

from twocaptcha.solver import ApiException, NetworkException

from challengebot.challenge.captcha import CaptchaChallenge, RecaptchaSolver


CHALLENGE = CaptchaChallenge(site_key="SITE123", page_url="https://challenge.test/captcha.php")


def _solver(**recaptcha):
    client = MagicMock()
    client.recaptcha.configure_mock(**recaptcha)
    return RecaptchaSolver("key", client=client), client


def test_solve_returns_token():
    solver, client = _solver(return_value={"captchaId": "77", "code": "TOKEN"})
    result = solver.solve(CHALLENGE)
    assert result.success
    assert result.token == "TOKEN"
    assert result.captcha_id == "77"
    client.recaptcha.assert_called_once_with(sitekey="SITE123", url="https://challenge.test/captcha.php")


def test_zero_balance_is_flagged():
    solver, _ = _solver(side_effect=ApiException("ERROR_ZERO_BALANCE"))
    result = solver.solve(CHALLENGE)
    assert not result.success
    assert result.token is None
    assert result.error.insufficient_balance
    assert "ERROR_ZERO_BALANCE" in str(result.error)


def test_network_error_is_not_a_balance_error():
    solver, _ = _solver(side_effect=NetworkException("connection reset"))
    result = solver.solve(CHALLENGE)
    assert not result.success
    assert not result.error.insufficient_balance


def test_empty_code_is_a_failure():
    solver, _ = _solver(return_value={"captchaId": "77"})
    assert not solver.solve(CHALLENGE).success


def test_submit_stage_api_error_is_caught():
    from twocaptcha import api as twocaptcha_api

    solver, _ = _solver(side_effect=twocaptcha_api.ApiException("ERROR_ZERO_BALANCE"))
    result = solver.solve(CHALLENGE)
    assert not result.success
    assert result.error.insufficient_balance


def test_solver_error_does_not_claim_balance_by_default():
    from challengebot.errors import SolverError

    assert not SolverError("ERROR_CAPTCHA_UNSOLVABLE").insufficient_balance
