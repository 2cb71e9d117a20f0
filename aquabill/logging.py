import logging
import sys

from aquabill.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that are noisy at INFO during migrations and menu prompts.
QUIET_LOGGERS = ("alembic", "asyncio")


def _formatter() -> logging.Formatter:
    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(fmt=JSON_FORMAT, rename_fields={"asctime": "timestamp", "levelname": "level"})
    return logging.Formatter(TEXT_FORMAT)


def configure_logging() -> None:
    """Set up stderr logging for the CLI.

    The root logger takes ``AQUABILL_LOG_LEVEL``; ``AQUABILL_LOG_SQL`` echoes
    SQL statements through the ``sqlalchemy.engine`` logger.  Run it again
    through ``reconfigure`` once Alembic's ``fileConfig`` has replaced the
    handlers.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.log_sql else logging.WARNING)


reconfigure = configure_logging
