import sys

from loguru import logger

from gigalixir_action import actions
from gigalixir_action.config import Settings
from gigalixir_action.inputs import read_request
from gigalixir_action.pipeline import DeploymentPipeline


def configure_logging(level: str = "INFO"):
    logger.remove()
    logger.add(
        sys.stdout,
        level=level,
        format="<level>{level: <8}</level> | {message}",
        colorize=False,
    )


def run() -> int:
    try:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        request = read_request()
        DeploymentPipeline(request, settings).run()
    except Exception as e:
        logger.opt(exception=e).debug("Deployment failed")
        return actions.set_failed(str(e))
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
