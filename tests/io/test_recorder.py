import json
import logging

import pytest

from dhaka_routing.io.query_events import QueryEvent, QuerySolved
from dhaka_routing.io.recorder import JsonlSink, MemorySink, Recorder


def solved(seq: int, problem_id: int = 1) -> QuerySolved:
    return QuerySolved(
        run_id="r",
        seq=seq,
        name="QuerySolved",
        problem_id=problem_id,
        policy="distance",
        status="reached",
        source=(23.80, 90.40),
        destination=(23.80, 90.44),
        segments=1,
        walk_km=0.0,
        total=8.0,
        objective="distance",
    )


class BrokenSink(MemorySink):
    def write(self, ev):
        raise OSError("disk full")


def test_jsonl_sink_appends_one_line_per_event(tmp_path):
    path = tmp_path / "runs" / "queries.jsonl"
    with Recorder(JsonlSink.open(path)) as rec:
        rec.emit(solved(1))
        # flushed per line, readable before close
        assert len(path.read_text().splitlines()) == 1
        rec.emit(solved(2, problem_id=3))
    with Recorder(JsonlSink.open(path)) as rec:
        rec.emit(solved(3))
    rows = [json.loads(line) for line in path.read_text().splitlines()]
    assert [r["seq"] for r in rows] == [1, 2, 3]
    assert rows[1]["problem_id"] == 3
    assert rows[0]["source"] == [23.80, 90.40]


def test_borrowed_stream_is_not_closed(tmp_path):
    with open(tmp_path / "q.jsonl", "w", encoding="utf-8") as fp:
        Recorder(JsonlSink(fp)).close()
        assert not fp.closed


def test_failing_sink_is_logged_and_others_still_receive(caplog):
    good = MemorySink()
    rec = Recorder(BrokenSink(), good)
    with caplog.at_level(logging.ERROR, logger="dhaka_routing.io.recorder"):
        rec.emit(solved(7))
    assert [ev.seq for ev in good.events] == [7]
    (record,) = caplog.records
    assert "BrokenSink" in record.getMessage() and "QuerySolved #7" in record.getMessage()
    assert record.exc_info is not None


def test_memory_sink_filters_by_event_name():
    sink = MemorySink()
    rec = Recorder(sink)
    rec.emit(solved(1))
    rec.emit(QueryEvent(run_id="r", seq=2, name="Other"))
    assert [ev.seq for ev in sink.named("QuerySolved")] == [1]
    assert len(sink.events) == 2


def test_recorder_needs_a_sink():
    with pytest.raises(ValueError):
        Recorder()
