# status_log.py
#
# Display-side status stream: human-readable lines tagged with a severity,
# newest first, cleared when the active view changes. Every line is mirrored
# to the "dsviz.status" logger.

import logging
from dataclasses import dataclass
from enum import Enum

status_logger = logging.getLogger("dsviz.status")


class Severity(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARN = "warn"
    ERROR = "error"
    DETAIL = "detail"


LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.DETAIL: logging.DEBUG,
}


@dataclass(frozen=True)
class StatusLine:
    severity: Severity
    message: str

    def __str__(self):
        return f"[{self.severity.value.upper()}] {self.message}"


class StatusLog:
    def __init__(self, limit=None):
        self.lines = []
        self.limit = limit
        self.aux_line = ""

    def append(self, message, severity=Severity.INFO):
        line = StatusLine(Severity(severity), message)
        self.lines.insert(0, line)
        if self.limit is not None:
            del self.lines[self.limit:]
        status_logger.log(LOG_LEVELS[line.severity], str(line))
        return line

    def info(self, message):
        return self.append(message, Severity.INFO)

    def success(self, message):
        return self.append(message, Severity.SUCCESS)

    def warn(self, message):
        return self.append(message, Severity.WARN)

    def error(self, message):
        return self.append(message, Severity.ERROR)

    def detail(self, message):
        return self.append(message, Severity.DETAIL)

    def set_aux_line(self, text):
        self.aux_line = text

    def clear(self):
        self.lines.clear()
        self.aux_line = ""

    def messages(self, severity=None):
        return [line.message for line in self.lines if severity is None or line.severity is Severity(severity)]

    def latest(self):
        return self.lines[0] if self.lines else None

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)
