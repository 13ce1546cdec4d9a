# io/search_logging.py
import itertools
import json
import logging
import math
import sys
from collections.abc import Iterator

from dhaka_routing.domain.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="dhaka_routing", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured search records. Starts are only logged in debug mode; ends are
    logged at INFO for unreachable outcomes and DEBUG otherwise.

    `bind` returns a copy carrying query context (problem id, policy), so each
    query logs through its own instance; copies share the logger and the
    search counter.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        *,
        context: dict | None = None,
        counter: Iterator[int] | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or default_json_logger(level=level)
        self.context = dict(context or {})
        self._counter = counter if counter is not None else itertools.count(1)
        self._seq: int | None = None

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **self.context}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def bind(self, **context) -> "SearchLogging":
        return SearchLogging(
            self.run_id,
            debug=self.debug,
            logger=self.log,
            context={**self.context, **context},
            counter=self._counter,
        )

    def search_start(self, *, source, destination, modes):
        self._seq = next(self._counter)
        if self.debug:
            self._emit(
                "DEBUG",
                "search_start",
                source=str(source),
                destination=str(destination),
                modes=sorted(m.value for m in modes),
                seq=self._seq,
            )

    def search_end(self, *, status, settled, cost, edges, ms):
        level = "INFO" if status.value == "unreachable" else "DEBUG"
        self._emit(
            level,
            "search_end",
            status=status.value,
            settled=settled,
            cost=None if math.isinf(cost) else round(cost, 6),
            edges=edges,
            ms=round(ms, 3),
            seq=self._seq,
        )
