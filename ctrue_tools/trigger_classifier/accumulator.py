"""Per-class counts and per-run observed/total buckets."""

from ctrue_tools.trigger_classifier.types import AccumulatorState, Category, RunBucket


class Accumulator:
    """The only mutable aggregate of an analysis pass.

    Counts only ever grow; `reset` swaps in empty state in one assignment.
    Independent accumulators (one per worker) combine with `merge` or `+`.
    """

    def __init__(self):
        self._state = self._empty()

    @staticmethod
    def _empty():
        return ({c: 0 for c in Category}, {}, {})

    def update(self, category: Category, run_id: int, weight=None, flags=None):
        """Record one classified event.

        `weight` is the run weight, or None when the run is not a good run;
        in that case only the class count (and input counters) move.
        """
        counts, buckets, input_counts = self._state
        counts[category] += 1

        if flags is not None:
            for name in flags.names_fired():
                input_counts[name] = input_counts.get(name, 0) + 1

        if weight is None:
            return
        if category == Category.COLLISION_CANDIDATE:
            buckets[run_id] = buckets.get(run_id, RunBucket()) + RunBucket(1, 1)
        elif category == Category.REJECTED:
            buckets[run_id] = buckets.get(run_id, RunBucket()) + RunBucket(0, 1)

    def reset(self):
        self._state = self._empty()

    def snapshot(self) -> AccumulatorState:
        counts, buckets, input_counts = self._state
        return AccumulatorState(
            counts=dict(counts),
            buckets=dict(buckets),
            input_counts=dict(input_counts),
        )

    @property
    def n_events(self) -> int:
        return sum(self._state[0].values())

    def merge(self, other: "Accumulator") -> "Accumulator":
        """Pointwise sum of two accumulators, returned as a new one."""
        a_counts, a_buckets, a_inputs = self._state
        b_counts, b_buckets, b_inputs = other._state

        merged = Accumulator()
        counts, buckets, input_counts = merged._state
        for c in Category:
            counts[c] = a_counts[c] + b_counts[c]
        for run_id in set(a_buckets) | set(b_buckets):
            buckets[run_id] = a_buckets.get(run_id, RunBucket()) + b_buckets.get(run_id, RunBucket())
        for name in set(a_inputs) | set(b_inputs):
            input_counts[name] = a_inputs.get(name, 0) + b_inputs.get(name, 0)
        return merged

    __add__ = merge

    def __eq__(self, other):
        if not isinstance(other, Accumulator):
            return NotImplemented
        return self.snapshot() == other.snapshot()
