"""Ordered trigger-pattern rules assigning one CTRUE class per event."""

import numbers

from ctrue_tools.trigger_classifier.config import ClassifierConfig
from ctrue_tools.trigger_classifier.types import (
    Category,
    DetectorDecision,
    EventRecord,
    TriggerFlags,
    ZdcEnergies,
)

_DECISION_CODES = frozenset(int(d) for d in DetectorDecision)


def _is_count(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _decision_pair_ok(pair) -> bool:
    if not isinstance(pair, (tuple, list)) or len(pair) != 2:
        return False
    return all(_is_count(d) and int(d) in _DECISION_CODES for d in pair)


def is_malformed(event: EventRecord, cfg: ClassifierConfig) -> bool:
    """True when a field of the event is missing, of the wrong type or out of range."""
    if not isinstance(event.flags, TriggerFlags):
        return True
    if not _is_count(event.tracklets) or event.tracklets < 0:
        return True
    if not _is_count(event.bunch_crossing) or not 0 <= event.bunch_crossing <= cfg.max_bunch_crossing:
        return True
    if not isinstance(event.zdc, ZdcEnergies) or not event.zdc.is_finite():
        return True
    return not (_decision_pair_ok(event.v0_decision) and _decision_pair_ok(event.ad_decision))


def _offline_beam_gas(event: EventRecord) -> bool:
    decisions = tuple(event.v0_decision) + tuple(event.ad_decision)
    return any(d == DetectorDecision.BEAM_GAS for d in decisions)


def classify_event(
    event: EventRecord,
    run_info=None,
    cfg: ClassifierConfig = None,
) -> Category:
    """Classify an event into one CTRUE class. The first matching rule wins:

      0. malformed scalar readings        -> REJECTED
      1. no beam-related input fired      -> EMPTY
      2. side A fired, side C silent      -> BEAM_SIDE_A
      3. side C fired, side A silent      -> BEAM_SIDE_C
      4. both sides + central confirmation -> COLLISION_CANDIDATE
      5. otherwise                        -> REJECTED

    `run_info` (a RunRecord or None) does not influence the class; weighting
    is decided downstream by the accumulator.
    """
    if cfg is None:
        cfg = ClassifierConfig()

    if is_malformed(event, cfg):
        return Category.REJECTED

    flags = event.flags

    if not flags.any_of(cfg.beam_inputs):
        return Category.EMPTY

    side_a = flags.any_of(cfg.side_a_inputs)
    side_c = flags.any_of(cfg.side_c_inputs)

    if side_a and not side_c:
        return Category.BEAM_SIDE_A
    if side_c and not side_a:
        return Category.BEAM_SIDE_C

    central = flags.any_of(cfg.central_inputs) and event.tracklets >= cfg.min_tracklets
    if side_a and side_c and central:
        if cfg.reject_offline_beam_gas and _offline_beam_gas(event):
            return Category.REJECTED
        return Category.COLLISION_CANDIDATE

    return Category.REJECTED
