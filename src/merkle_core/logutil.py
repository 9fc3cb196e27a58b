import logging
import re
from typing import Iterable, Union


_LONG_HEX = re.compile(r"\b([0-9a-fA-F]{12})[0-9a-fA-F]{20,}\b")


class DigestAbbreviatingFilter(logging.Filter):
    """Shorten full hex digests in log records to their first 12 characters."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = str(record.getMessage())
            record.msg = _LONG_HEX.sub(r"\1…", msg)
            record.args = ()
        except (TypeError, ValueError):
            # leave malformed records for the handler to report
            pass
        return True


_FILTER = DigestAbbreviatingFilter()


def setup_logging(
    level: Union[int, str] = logging.INFO,
    loggers: Iterable[str] = ("merkle_core", "merkle_sdk", "merkle_cli"),
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level)
    f = _FILTER
    # logger filters do not see records propagated from child loggers
    for h in logging.getLogger().handlers:
        h.addFilter(f)
    for name in loggers:
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.addFilter(f)
