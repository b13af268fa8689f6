import logging

from placement_studio.components.logger.logger_interface import LoggerInterface

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Logger(LoggerInterface):
    def __init__(self, log_format: str | None = None, log_level: str = "INFO") -> None:
        self.log_format = log_format or DEFAULT_LOG_FORMAT
        self.log_level = logging.getLevelName(log_level.upper())
        if not isinstance(self.log_level, int):
            raise ValueError(f"Invalid log level: {log_level}")

        logging.basicConfig(format=self.log_format, level=self.log_level)

    def get_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(self.log_level)
        return logger
