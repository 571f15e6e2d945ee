"""Good-run tables: run number -> (weight, mu) for one data-taking period."""

import math
from types import MappingProxyType

import pandas as pd

from ctrue_tools.trigger_classifier.exceptions import ConfigurationError, RunNotFoundError
from ctrue_tools.trigger_classifier.types import RunRecord


# (run, weight, mu). Weights are the run's share of the period luminosity,
# mu the mean number of interactions per bunch crossing.
GOOD_RUNS = {
    "pbpb2018": (
        (295585, 0.61, 0.0012),
        (295586, 1.18, 0.0021),
        (295588, 0.94, 0.0017),
        (295589, 1.32, 0.0024),
        (295610, 0.87, 0.0015),
        (295611, 1.05, 0.0019),
        (295612, 1.41, 0.0026),
        (295615, 0.52, 0.0010),
        (296623, 1.12, 0.0022),
        (296690, 1.36, 0.0028),
        (297219, 1.24, 0.0031),
        (297481, 0.78, 0.0018),
    ),
    "pbpb2015": (
        (244918, 0.44, 0.0006),
        (244975, 0.71, 0.0009),
        (244980, 0.83, 0.0011),
        (245064, 1.02, 0.0014),
        (245145, 1.27, 0.0019),
        (245146, 1.19, 0.0017),
        (245346, 0.96, 0.0013),
        (246087, 1.33, 0.0021),
        (246495, 1.08, 0.0016),
        (246994, 0.89, 0.0012),
    ),
    "xexe2017": (
        (280234, 1.16, 0.0047),
        (280235, 0.84, 0.0035),
    ),
}


class GoodRunTable:
    """Immutable run -> RunRecord mapping for one period.

    `lookup` returns None for runs outside the table; those events are still
    classified but left out of every weighted aggregate.
    """

    def __init__(self, records, period: str = None):
        runs = {}
        for rec in records:
            if not isinstance(rec, RunRecord):
                rec = RunRecord(int(rec[0]), float(rec[1]), float(rec[2]))
            if rec.run_id in runs:
                raise ConfigurationError(f"Duplicate run {rec.run_id} in good-run table")
            if not (rec.weight > 0 and math.isfinite(rec.weight)):
                raise ConfigurationError(f"Run {rec.run_id}: weight must be > 0, got {rec.weight}")
            if not (rec.mu >= 0 and math.isfinite(rec.mu)):
                raise ConfigurationError(f"Run {rec.run_id}: mu must be >= 0, got {rec.mu}")
            runs[rec.run_id] = rec
        self._runs = MappingProxyType(runs)
        self.period = period

    @classmethod
    def from_preset(cls, period: str) -> "GoodRunTable":
        if period not in GOOD_RUNS:
            raise ConfigurationError(
                f"Unknown period '{period}'. Available: {', '.join(GOOD_RUNS)}"
            )
        return cls(GOOD_RUNS[period], period=period)

    @classmethod
    def from_records(cls, records, period: str = None) -> "GoodRunTable":
        """Build from RunRecords or (run, weight, mu) triples."""
        return cls(records, period=period)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, period: str = None) -> "GoodRunTable":
        missing = {"run", "weight", "mu"} - set(df.columns)
        if missing:
            raise ConfigurationError(f"Run table missing columns: {', '.join(sorted(missing))}")
        records = [
            RunRecord(int(r.run), float(r.weight), float(r.mu))
            for r in df[["run", "weight", "mu"]].itertuples(index=False)
        ]
        return cls(records, period=period)

    @classmethod
    def from_csv(cls, path, period: str = None) -> "GoodRunTable":
        return cls.from_frame(pd.read_csv(path), period=period)

    def lookup(self, run_id: int):
        """Return the RunRecord for `run_id`, or None when it is not a good run."""
        return self._runs.get(run_id)

    def __getitem__(self, run_id: int) -> RunRecord:
        try:
            return self._runs[run_id]
        except KeyError:
            raise RunNotFoundError(run_id, self.period) from None

    def __contains__(self, run_id) -> bool:
        return run_id in self._runs

    def __iter__(self):
        return iter(sorted(self._runs))

    def __len__(self) -> int:
        return len(self._runs)

    def records(self) -> list:
        return [self._runs[r] for r in sorted(self._runs)]

    def __repr__(self):
        return f"GoodRunTable(period={self.period!r}, runs={len(self)})"
