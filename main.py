# main.py
from dhaka_routing.app.cli import main


def run(argv: list[str] | None = None) -> int:
    # Same as the `dhaka-routing` console script; reads the CSVs from the working directory by default.
    return main(argv)


if __name__ == "__main__":
    raise SystemExit(run())
