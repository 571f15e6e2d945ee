"""Summaries and console report for a CTRUE analysis pass."""

from ctrue_tools.trigger_classifier.efficiency import total_efficiency
from ctrue_tools.trigger_classifier.types import AccumulatorState, Category


def category_summary(state: AccumulatorState) -> dict:
    """Count and fraction per class, keyed by class value (B/E/A/C/rejected)."""
    n = state.n_events
    return {
        c.value: {
            "count": state.counts.get(c, 0),
            "fraction": state.counts.get(c, 0) / n if n > 0 else 0.0,
        }
        for c in Category
    }


def print_report(results: list, summary: dict = None, input_counts: dict = None):
    """Pretty-print efficiency results (and optionally class/input counts) to stdout."""
    if summary:
        n = sum(m["count"] for m in summary.values())
        print(f"\n{'='*55}")
        print(f"  Events: {n:,}")
        print(f"{'='*55}")
        for label, m in summary.items():
            print(f"  {label:<10} {m['count']:>10,}  ({m['fraction']:.1%})")

    if input_counts:
        print(f"\n  Trigger inputs fired:")
        for name in sorted(input_counts):
            print(f"    {name:<6} {input_counts[name]:>10,}")

    print(f"\n  {'mu':>10} {'weight':>8} {'eff':>8} {'err':>8}")
    print(f"  {'-'*38}")
    for r in results:
        print(f"  {r.mu:>10.5f} {r.weight:>8.3f} {r.efficiency:>8.4f} {r.error:>8.4f}")

    total = total_efficiency(results)
    if total is not None:
        print(f"\n  Total efficiency: {total[0]:.4f} +- {total[1]:.4f}")
    print()
