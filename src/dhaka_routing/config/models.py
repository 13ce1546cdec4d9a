from math import isfinite
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from dhaka_routing.domain.entities.geography import TransportMode
from dhaka_routing.policy.cost import BUS_RATE, CAR_RATE, METRO_RATE


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # per-search records at DEBUG


# ----------------- NETWORK ---------------------


class NetworkFilesModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    data_dir: str = "."
    roadmap: str = "Roadmap-Dhaka.csv"
    metro: str = "Routemap-DhakaMetroRail.csv"
    bikolpo: str = "Routemap-BikolpoBus.csv"
    uttara: str = "Routemap-UttaraBus.csv"
    must_exist: bool = False

    def path(self, which: str) -> Path:
        return Path(self.data_dir) / getattr(self, which)

    @model_validator(mode="after")
    def _check_exists(self):
        if not self.must_exist:
            return self
        missing = [
            str(self.path(w))
            for w in ("roadmap", "metro", "bikolpo", "uttara")
            if not self.path(w).exists()
        ]
        if missing:
            raise ValueError(f"network files not found: {', '.join(missing)}")
        return self


# ----------------- COST POLICIES ---------------------


class DistancePolicyModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["distance"] = "distance"
    name: str = "distance"
    modes: list[TransportMode] = Field(default_factory=lambda: [TransportMode.CAR])

    @field_validator("modes")
    @classmethod
    def _non_empty(cls, v: list[TransportMode]) -> list[TransportMode]:
        if not v:
            raise ValueError("modes must not be empty")
        return v


class FarePolicyModel(BaseModel):
    """Cost = distance x per-mode rate; the rate table doubles as the allowed-mode set."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["fare"] = "fare"
    name: str
    rates: dict[TransportMode, float]

    @field_validator("rates")
    @classmethod
    def _nonneg(cls, v: dict[TransportMode, float], info: ValidationInfo):
        if not v:
            raise ValueError(f"{info.field_name} must not be empty")
        for mode, rate in v.items():
            if not isfinite(rate) or rate < 0:
                raise ValueError(f"rate for {mode.value} must be finite and >= 0, got {rate}")
        return v


PolicyUnion = Annotated[
    DistancePolicyModel | FarePolicyModel,
    Field(discriminator="kind"),
]


def _economy() -> FarePolicyModel:
    return FarePolicyModel(
        name="economy", rates={TransportMode.CAR: CAR_RATE, TransportMode.METRO: METRO_RATE}
    )


def _all_modes() -> FarePolicyModel:
    return FarePolicyModel(
        name="all_modes",
        rates={
            TransportMode.CAR: CAR_RATE,
            TransportMode.METRO: METRO_RATE,
            TransportMode.BUS_BIKOLPO: BUS_RATE,
            TransportMode.BUS_UTTARA: BUS_RATE,
        },
    )


class ProblemModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str
    policy: PolicyUnion


def default_problems() -> dict[int, ProblemModel]:
    # 4-6 nominally add time/deadline constraints but share problem 3's policy
    return {
        1: ProblemModel(title="Shortest car route", policy=DistancePolicyModel()),
        2: ProblemModel(title="Cheapest (Car+Metro)", policy=_economy()),
        3: ProblemModel(title="Cheapest (All modes)", policy=_all_modes()),
        4: ProblemModel(title="Cheapest with time (simplified)", policy=_all_modes()),
        5: ProblemModel(title="Fastest (simplified)", policy=_all_modes()),
        6: ProblemModel(title="Cheapest with deadline (simplified)", policy=_all_modes()),
    }


# ----------------- QUERIES ---------------------


class QueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    source: tuple[float, float]  # (lat, lon)
    destination: tuple[float, float]

    @field_validator("source", "destination")
    @classmethod
    def _in_range(cls, v: tuple[float, float], info: ValidationInfo):
        lat, lon = v
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            raise ValueError(f"{info.field_name} out of range: {v}")
        return v


def default_queries() -> list[QueryModel]:
    return [
        QueryModel(source=(23.834145, 90.363833), destination=(23.738265, 90.396151)),
        QueryModel(source=(23.810000, 90.370000), destination=(23.750000, 90.395000)),
    ]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "dhaka"
    run_id: str = "local"
    log: LogModel = LogModel()
    network: NetworkFilesModel = NetworkFilesModel()
    problems: dict[int, ProblemModel] = Field(default_factory=default_problems)
    queries: list[QueryModel] = Field(default_factory=default_queries)
    out_dir: str = "."
    write_kml: bool = True

    @field_validator("problems")
    @classmethod
    def _positive_ids(cls, v: dict[int, ProblemModel]):
        if not v:
            raise ValueError("at least one problem must be configured")
        bad = [k for k in v if k < 1]
        if bad:
            raise ValueError(f"problem ids must be >= 1, got {bad}")
        return v
