"""Tagged logger for the script controller."""

from utils.log_utils import log


class CommandLogger:
    def __init__(self, system: str = "SCRIPTS") -> None:
        self.system = system

    def debug(self, message: str) -> None:
        log(self.system, message, "DEBUG")

    def info(self, message: str) -> None:
        log(self.system, message, "INFO")

    def warn(self, message: str) -> None:
        log(self.system, message, "WARN")

    def error(self, message: str) -> None:
        log(self.system, message, "ERROR")
