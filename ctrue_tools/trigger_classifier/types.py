import math
import numbers
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Optional

import pandas as pd


class Category(str, Enum):
    """CTRUE trigger classes. Values follow the B/E/A/C naming of the analysis."""
    COLLISION_CANDIDATE = "B"
    EMPTY = "E"
    BEAM_SIDE_A = "A"
    BEAM_SIDE_C = "C"
    REJECTED = "rejected"


class DetectorDecision(IntEnum):
    """Offline V0/AD timing decision for one side."""
    EMPTY = 0
    BEAM_BEAM = 1
    BEAM_GAS = 2
    FAKE = 3


@dataclass(frozen=True)
class ZdcEnergies:
    zna: float
    znc: float
    zpa: float
    zpc: float

    def is_finite(self) -> bool:
        return all(
            isinstance(e, numbers.Real) and math.isfinite(e)
            for e in (self.zna, self.znc, self.zpa, self.zpc)
        )


@dataclass(frozen=True)
class TriggerFlags:
    """Decoded trigger inputs of one event: input name -> fired."""
    fired: dict = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "fired", MappingProxyType(dict(self.fired)))

    def __hash__(self):
        return hash(tuple(self.fired.items()))

    def __getitem__(self, name: str) -> bool:
        return self.fired[name]

    def __contains__(self, name: str) -> bool:
        return name in self.fired

    def __iter__(self):
        return iter(self.fired)

    def __len__(self) -> int:
        return len(self.fired)

    def any_of(self, names) -> bool:
        return any(self.fired.get(n, False) for n in names)

    def names_fired(self) -> tuple:
        return tuple(n for n, v in self.fired.items() if v)


@dataclass(frozen=True)
class EventRecord:
    run_id: int
    flags: TriggerFlags
    zdc: ZdcEnergies
    v0_decision: tuple          # (side A, side C), DetectorDecision codes
    ad_decision: tuple          # (side A, side C), DetectorDecision codes
    tracklets: int = 0
    bunch_crossing: int = 0


@dataclass(frozen=True)
class RunRecord:
    run_id: int
    weight: float
    mu: float


@dataclass(frozen=True)
class RunBucket:
    observed: int = 0
    total: int = 0

    @property
    def fraction(self) -> Optional[float]:
        if self.total == 0:
            return None
        return self.observed / self.total

    def __add__(self, other: "RunBucket") -> "RunBucket":
        return RunBucket(self.observed + other.observed, self.total + other.total)


@dataclass(frozen=True)
class AccumulatorState:
    """Read-only copy of the accumulator contents."""
    counts: dict        # Category -> int
    buckets: dict       # run_id -> RunBucket
    input_counts: dict  # trigger input name -> int

    @property
    def n_events(self) -> int:
        return sum(self.counts.values())

    def buckets_frame(self, table=None) -> pd.DataFrame:
        """Per-run buckets as a DataFrame, sorted by run.

        With a GoodRunTable, the run weight and mu are joined in (NaN for runs
        missing from the table).
        """
        from ctrue_tools.trigger_classifier.efficiency import binomial_error

        rows = []
        for run_id in sorted(self.buckets):
            b = self.buckets[run_id]
            err = binomial_error(b.observed, b.total)
            row = {
                "run": run_id,
                "observed": b.observed,
                "total": b.total,
                "fraction": b.fraction if b.fraction is not None else float("nan"),
                "fraction_err": err if err is not None else float("nan"),
            }
            if table is not None:
                rec = table.lookup(run_id)
                row["weight"] = rec.weight if rec is not None else float("nan")
                row["mu"] = rec.mu if rec is not None else float("nan")
            rows.append(row)
        columns = ["run", "observed", "total", "fraction", "fraction_err"]
        if table is not None:
            columns += ["weight", "mu"]
        return pd.DataFrame(rows, columns=columns)


@dataclass(frozen=True)
class EfficiencyResult:
    mu: float
    efficiency: float   # clamped to [0, 1]
    error: float        # >= 0
    weight: float = 1.0
