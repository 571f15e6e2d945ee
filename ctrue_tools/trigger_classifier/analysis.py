"""One analysis session: active period, classifier and accumulated state."""

from ctrue_tools.trigger_classifier.accumulator import Accumulator
from ctrue_tools.trigger_classifier.cascade import classify_event
from ctrue_tools.trigger_classifier.config import ClassifierConfig
from ctrue_tools.trigger_classifier.efficiency import estimate_from_buckets
from ctrue_tools.trigger_classifier.exceptions import ConfigurationError
from ctrue_tools.trigger_classifier.inputs import TriggerInputSet
from ctrue_tools.trigger_classifier.runs import GoodRunTable
from ctrue_tools.trigger_classifier.types import AccumulatorState, Category, EventRecord


class CTrueAnalysis:
    """Classifies events one at a time and accumulates per-run buckets.

    The run table and trigger-input map are injected; `for_period` builds
    both from one of the built-in presets.
    """

    def __init__(self, table: GoodRunTable, inputs: TriggerInputSet,
                 cfg: ClassifierConfig = None):
        self.table = table
        self.inputs = inputs
        self.cfg = cfg if cfg is not None else ClassifierConfig()
        self.accumulator = Accumulator()

    @classmethod
    def for_period(cls, period: str, cfg: ClassifierConfig = None) -> "CTrueAnalysis":
        return cls(GoodRunTable.from_preset(period), TriggerInputSet.from_preset(period), cfg)

    @property
    def period(self):
        return self.table.period

    def select_period(self, period: str):
        """Replace run table and input map with another preset.

        Refused while events of the current period are accumulated; call
        `reset` first.
        """
        if self.accumulator.n_events > 0:
            raise ConfigurationError(
                f"Cannot switch to '{period}': {self.accumulator.n_events} events "
                f"of period '{self.period}' are accumulated, reset first"
            )
        table = GoodRunTable.from_preset(period)
        inputs = TriggerInputSet.from_preset(period)
        self.table, self.inputs = table, inputs

    def make_event(self, run_id: int, l0_inputs: int, l1_inputs: int, **readings) -> EventRecord:
        """Build an EventRecord from raw trigger words using the active input map."""
        return EventRecord(run_id=run_id, flags=self.inputs.decode(l0_inputs, l1_inputs), **readings)

    def process_event(self, event: EventRecord) -> Category:
        run_info = self.table.lookup(event.run_id)
        category = classify_event(event, run_info, self.cfg)
        weight = run_info.weight if run_info is not None else None
        self.accumulator.update(category, event.run_id, weight, flags=event.flags)
        return category

    def process_events(self, events):
        for event in events:
            self.process_event(event)

    def snapshot(self) -> AccumulatorState:
        return self.accumulator.snapshot()

    def reset(self):
        self.accumulator.reset()

    def estimate_efficiency(self, degree: int = 1) -> list:
        """Fit and evaluate the efficiency over all good-run buckets.

        Raises InsufficientDataError when the buckets cannot constrain the fit.
        """
        return estimate_from_buckets(self.accumulator.snapshot().buckets, self.table, degree)
