"""CTRUE trigger-class analysis: B/E/A/C classification, run buckets and efficiency fit."""

from ctrue_tools.trigger_classifier.accumulator import Accumulator
from ctrue_tools.trigger_classifier.analysis import CTrueAnalysis
from ctrue_tools.trigger_classifier.cascade import classify_event
from ctrue_tools.trigger_classifier.config import PERIODS, ClassifierConfig
from ctrue_tools.trigger_classifier.efficiency import (
    binomial_error,
    compute_efficiency,
    fit_polynomial,
    total_efficiency,
)
from ctrue_tools.trigger_classifier.exceptions import (
    ConfigurationError,
    CTrueError,
    InsufficientDataError,
    RunNotFoundError,
)
from ctrue_tools.trigger_classifier.inputs import TriggerInputSet
from ctrue_tools.trigger_classifier.runs import GoodRunTable
from ctrue_tools.trigger_classifier.types import (
    AccumulatorState,
    Category,
    DetectorDecision,
    EfficiencyResult,
    EventRecord,
    RunBucket,
    RunRecord,
    TriggerFlags,
    ZdcEnergies,
)

__all__ = [
    "Category",
    "DetectorDecision",
    "ZdcEnergies",
    "TriggerFlags",
    "EventRecord",
    "RunRecord",
    "RunBucket",
    "AccumulatorState",
    "EfficiencyResult",
    "ClassifierConfig",
    "PERIODS",
    "GoodRunTable",
    "TriggerInputSet",
    "classify_event",
    "Accumulator",
    "binomial_error",
    "fit_polynomial",
    "compute_efficiency",
    "total_efficiency",
    "CTrueAnalysis",
    "CTrueError",
    "ConfigurationError",
    "RunNotFoundError",
    "InsufficientDataError",
]
