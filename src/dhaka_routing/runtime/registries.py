# runtime/registries.py
from collections.abc import Callable, Mapping

from dhaka_routing.config.models import (
    DistancePolicyModel,
    FarePolicyModel,
    PolicyUnion,
    ProblemModel,
)
from dhaka_routing.policy.cost import CostPolicy, Objective, Problem

PolicyFactory = Callable[[PolicyUnion], CostPolicy]

_policy_registry: dict[str, PolicyFactory] = {}


def register_policy(kind: str):
    def deco(fn: PolicyFactory):
        _policy_registry[kind] = fn
        return fn

    return deco


def make_cost_policy(cfg: PolicyUnion) -> CostPolicy:
    try:
        factory = _policy_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown policy kind {cfg.kind!r}") from None
    return factory(cfg)


@register_policy("distance")
def _make_distance(cfg: DistancePolicyModel) -> CostPolicy:
    return CostPolicy(cfg.name, Objective.DISTANCE, frozenset(cfg.modes))


@register_policy("fare")
def _make_fare(cfg: FarePolicyModel) -> CostPolicy:
    return CostPolicy(cfg.name, Objective.COST, frozenset(cfg.rates), dict(cfg.rates))


# ----- Problem table --------------------------


def make_problems(cfg: Mapping[int, ProblemModel]) -> dict[int, Problem]:
    return {
        pid: Problem(id=pid, title=p.title, policy=make_cost_policy(p.policy))
        for pid, p in sorted(cfg.items())
    }
