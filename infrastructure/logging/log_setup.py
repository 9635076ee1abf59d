from loguru import logger

_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSS} {level} {message} {extra}"


def setup_console_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(lambda msg: print(msg, end=""), level=level, format=_FORMAT)
