from typing import NotRequired, TextIO, TypedDict
import logging
import sys
from scripts.pbxplist.utils import resolve_config


class LoggerConfig(TypedDict):
    name: NotRequired[str]
    is_enabled: NotRequired[bool]
    level: NotRequired[int]
    format: NotRequired[str]
    stream: NotRequired[TextIO | None]


class LoggerConfigRequired(TypedDict):
    name: str
    is_enabled: bool
    level: int
    format: str
    stream: TextIO | None


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "name": "pbxplist",
    "is_enabled": True,
    "level": logging.WARNING,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "stream": None,
}


class Logger:
    """Named ``logging`` logger with a single stream handler owned by pbxplist."""

    def __init__(self, config: LoggerConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_LOGGER_CONFIG)
        self.logger = logging.getLogger(self.config["name"])
        self.set_configuration()

    @property
    def handler_name(self) -> str:
        return f"{self.config['name']}.stream"

    def set_configuration(self):
        if not self.config["is_enabled"]:
            self.logger.disabled = True
            return

        self.logger.disabled = False
        self.logger.setLevel(self.config["level"])
        # resolved per call so a redirected stderr is honoured
        stream = self.config["stream"] or sys.stderr
        for previous in self._own_handlers():
            self.logger.removeHandler(previous)
        handler = logging.StreamHandler(stream)
        handler.set_name(self.handler_name)
        handler.setFormatter(logging.Formatter(self.config["format"]))
        self.logger.addHandler(handler)

    def _own_handlers(self) -> list[logging.Handler]:
        return [handler for handler in self.logger.handlers if handler.get_name() == self.handler_name]
