import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # uvicorn installs its own handlers; keep sqlalchemy quiet unless DB_ECHO asks for it
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
