import logging
from typing import Optional

_CONFIGURED = False


class SafeFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        for key in ("task", "backend"):
            if key not in record.__dict__:
                record.__dict__[key] = "-"
        return super().format(record)


def configure_logging(level: Optional[str] = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    import taskboard.config as _cfg

    level_name = (level or _cfg.LOG_LEVEL or "INFO").upper()
    resolved_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        fmt = "%(asctime)s %(levelname)s %(name)s backend=%(backend)s task=%(task)s %(message)s"
        handler = logging.StreamHandler()
        handler.setFormatter(SafeFormatter(fmt))
        root.addHandler(handler)

    root.setLevel(resolved_level)
    _CONFIGURED = True
