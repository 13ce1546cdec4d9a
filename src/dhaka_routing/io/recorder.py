# io/recorder.py
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import IO, Protocol

from dhaka_routing.io.query_events import QueryEvent

log = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, ev: QueryEvent) -> None: ...
    def close(self) -> None: ...


class JsonlSink:
    """One JSON object per query, flushed per line so an interrupted run stays readable."""

    def __init__(self, fp: IO[str], *, owns: bool = False):
        self.fp = fp
        self._owns = owns

    @classmethod
    def open(cls, path: str | Path) -> "JsonlSink":
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(open(path, "a", encoding="utf-8"), owns=True)

    def write(self, ev: QueryEvent) -> None:
        self.fp.write(json.dumps(asdict(ev), default=str) + "\n")
        self.fp.flush()

    def close(self) -> None:
        if self._owns:
            self.fp.close()


class MemorySink:
    def __init__(self):
        self.events: list[QueryEvent] = []

    def write(self, ev: QueryEvent) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list[QueryEvent]:
        return [ev for ev in self.events if ev.name == name]

    def close(self) -> None:
        pass


class Recorder:
    """Fans query records out to every sink. A failing sink is logged and skipped."""

    def __init__(self, *sinks: Sink):
        if not sinks:
            raise ValueError("Recorder needs at least one sink")
        self.sinks = sinks

    def emit(self, ev: QueryEvent) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                log.exception("sink %s failed to write %s #%d", type(s).__name__, ev.name, ev.seq)

    def close(self) -> None:
        for s in self.sinks:
            s.close()

    def __enter__(self) -> "Recorder":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
