# dhaka_routing/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from dhaka_routing.app.solver import RoutingSolver
from dhaka_routing.config.models import ScenarioModel
from dhaka_routing.domain.hooks import NoopHooks
from dhaka_routing.domain.network import NetworkGraph
from dhaka_routing.io.loader import build_network
from dhaka_routing.io.recorder import Recorder
from dhaka_routing.io.search_logging import SearchLogging, default_json_logger
from dhaka_routing.runtime.registries import make_problems


@dataclass
class App:
    config: ScenarioModel
    graph: NetworkGraph
    solver: RoutingSolver


def build(
    cfg: ScenarioModel | Mapping | None = None,
    *,
    graph: NetworkGraph | None = None,
    recorder: Recorder | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = ScenarioModel()
    else:
        model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Logging
    if use_logging:
        default_json_logger(level=model.log.level)
        hooks = SearchLogging(run_id=model.run_id, level=model.log.level, debug=model.log.debug)
    else:
        hooks = NoopHooks()

    # 2) Network (built once, read-only afterwards)
    if graph is None:
        graph = build_network(model.network)

    # 3) Policies and solver
    problems = make_problems(model.problems)
    solver = RoutingSolver(
        graph=graph, problems=problems, hooks=hooks, recorder=recorder, run_id=model.run_id
    )
    return App(model, graph, solver)
