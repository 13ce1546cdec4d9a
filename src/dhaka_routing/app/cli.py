# dhaka_routing/app/cli.py
import argparse
import sys
from pathlib import Path

from dhaka_routing.app.build import build
from dhaka_routing.config.models import QueryModel, ScenarioModel
from dhaka_routing.domain.entities.geography import Location
from dhaka_routing.io.kml import write_kml
from dhaka_routing.io.recorder import JsonlSink, Recorder
from dhaka_routing.io.report import format_itinerary, separator


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="dhaka-routing", description="Multi-modal route planning over the Dhaka network."
    )
    p.add_argument("--config", type=Path, help="JSON scenario file")
    p.add_argument("--data-dir", help="directory holding the four route CSVs")
    p.add_argument("--out-dir", help="where KML traces are written")
    p.add_argument(
        "--query",
        nargs=4,
        type=float,
        action="append",
        metavar=("SRC_LAT", "SRC_LON", "DST_LAT", "DST_LON"),
        help="query pair; repeat for several (default: the two reference cases)",
    )
    p.add_argument("--problem", type=int, action="append", help="problem id; repeatable")
    p.add_argument("--no-kml", action="store_true", help="skip KML export")
    p.add_argument("--record", type=Path, help="append per-query JSON lines to this file")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def load_scenario(args: argparse.Namespace) -> ScenarioModel:
    data = {}
    if args.config is not None:
        data = ScenarioModel.model_validate_json(args.config.read_text()).model_dump()
    if args.data_dir:
        data.setdefault("network", {})["data_dir"] = args.data_dir
    if args.out_dir:
        data["out_dir"] = args.out_dir
    if args.query:
        data["queries"] = [
            QueryModel(source=(q[0], q[1]), destination=(q[2], q[3])).model_dump()
            for q in args.query
        ]
    if args.no_kml:
        data["write_kml"] = False
    if args.log_level:
        data.setdefault("log", {})["level"] = args.log_level
    return ScenarioModel.model_validate(data)


def run(
    model: ScenarioModel,
    problem_ids: list[int] | None = None,
    record: Path | None = None,
    out=None,
) -> int:
    if out is None:
        out = sys.stdout
    recorder = Recorder(JsonlSink.open(record)) if record else None
    try:
        print(separator(), file=out)
        print("  Dhaka Routing System", file=out)
        print(separator(), file=out)
        app = build(model, recorder=recorder)
        g = app.graph
        print(
            f"Graph loaded: {g.location_count()} locations, {g.edge_count()} edges", file=out
        )
        print(separator(), file=out)

        ids = problem_ids or sorted(app.solver.problems)
        out_dir = Path(model.out_dir)
        for case, q in enumerate(model.queries, start=1):
            src, dst = Location(*q.source), Location(*q.destination)
            print(f"\nTEST CASE {case}", file=out)
            print(separator(), file=out)
            for pid in ids:
                problem = app.solver.problem(pid)
                print(f"\nPROBLEM {pid}: {problem.title}", file=out)
                print(separator("-"), file=out)
                itinerary = app.solver.solve(pid, src, dst)
                print(
                    format_itinerary(pid, itinerary, src, dst, show_cost=problem.shows_cost),
                    file=out,
                )
                if model.write_kml:
                    path = write_kml(itinerary, out_dir / f"problem{pid}_case{case}.kml")
                    print(f"KML: {path}", file=out)
        print(separator(), file=out)
    finally:
        if recorder is not None:
            recorder.close()
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    model = load_scenario(args)
    unknown = sorted(set(args.problem or ()) - set(model.problems))
    if unknown:
        print(f"unknown problem id(s): {unknown}", file=sys.stderr)
        return 2
    return run(model, problem_ids=args.problem, record=args.record)


if __name__ == "__main__":
    sys.exit(main())
