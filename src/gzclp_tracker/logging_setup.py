import logging
import re

from .config import SETTINGS

# Free-text pain notes show up in model reprs, e.g. notes='tweaked it deadlifting'
_NOTES_RE = re.compile(r"""notes=(?:'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")""")


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that redacts free-text pain/soreness notes from log records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except Exception:  # pragma: no cover - malformed record, leave untouched
            return True
        redacted = _NOTES_RE.sub("notes=<REDACTED>", message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def setup_logging(level: int | str | None = None) -> None:
    """
    Set up root logger with a redacting stream handler.
    """
    root = logging.getLogger()
    if root.handlers:
        return  # already configured
    root.setLevel(level if level is not None else SETTINGS.LOG_LEVEL)
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch.addFilter(SensitiveDataFilter())
    root.addHandler(ch)
