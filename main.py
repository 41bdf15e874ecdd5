from __future__ import annotations

from loguru import logger

from challengebot.logging_setup import setup_logging
from challengebot.config import load_config
from challengebot.errors import ConfigError
from challengebot.challenge.flow import run_challenge


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_SOLVER_FAILED = 2


def main() -> int:
    setup_logging()
    try:
        config = load_config()
    except ConfigError as exc:
        logger.error(f"Configuration error: {exc}")
        return EXIT_FAILED
    if config.log_dir:
        setup_logging(config.log_dir)

    logger.info(f"Starting challenge at {config.challenge.base_url}")
    result = run_challenge(config)

    if result.solver_failed:
        if result.insufficient_balance:
            logger.error(f"You do not have enough balance to solve the captcha (insufficient balance): {result.error}")
        else:
            logger.error(f"Captcha solve failed: {result.error}")
        return EXIT_SOLVER_FAILED
    if not result.ok:
        logger.error(f"Challenge failed at stage '{result.stage.value}': {result.error}")
        return EXIT_FAILED
    if result.completed:
        print(result.final_html)
    else:
        logger.info(f"Run ended cleanly at stage '{result.stage.value}' without a captcha step")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
