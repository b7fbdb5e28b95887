"""
Recorded Metrics

The closed set of events counted on the device, and extraction of their
counts from OS signpost metrics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional

# Signpost category all app metrics are recorded under
SIGNPOST_CATEGORY = "AppMetrics"


class Metric(Enum):
    """Events counted over an analytics window (value is the signpost name)"""

    backgroundTasks = "backgroundTasks"
    completedOnboarding = "completedOnboarding"
    checkedIn = "checkedIn"
    deletedLastCheckIn = "deletedLastCheckIn"
    completedQuestionnaireAndStartedIsolation = "completedQuestionnaireAndStartedIsolation"
    completedQuestionnaireButDidNotStartIsolation = "completedQuestionnaireButDidNotStartIsolation"
    receivedPositiveTestResult = "receivedPositiveTestResult"
    receivedNegativeTestResult = "receivedNegativeTestResult"
    receivedVoidTestResult = "receivedVoidTestResult"
    contactCaseBackgroundTick = "contactCaseBackgroundTick"
    indexCaseBackgroundTick = "indexCaseBackgroundTick"
    isolationBackgroundTick = "isolationBackgroundTick"
    pauseTick = "pauseTick"
    runningNormallyTick = "runningNormallyTick"


@dataclass(frozen=True)
class SignpostMetric:
    """A named event counter reported by the OS for one category"""

    signpost_category: str
    signpost_name: str
    total_count: int


def signpost_counts(signposts: Optional[Iterable[SignpostMetric]],
                    category: str = SIGNPOST_CATEGORY) -> Dict[str, int]:
    """
    Collect signpost totals for one category, keyed by signpost name

    Raises:
        ValueError: If the same name is reported twice in the category
    """
    counts: Dict[str, int] = {}
    if not signposts:
        return counts

    for signpost in signposts:
        if signpost.signpost_category != category:
            continue
        if signpost.signpost_name in counts:
            raise ValueError(f"Duplicate signpost name: {signpost.signpost_name}")
        counts[signpost.signpost_name] = signpost.total_count
    return counts


def recorded_metrics_from_signposts(signposts: Optional[Iterable[SignpostMetric]],
                                    category: str = SIGNPOST_CATEGORY) -> Dict[Metric, int]:
    """
    Build a recorded metrics table from OS signpost metrics

    Signposts outside the category, or whose name is not a known metric,
    are ignored.
    """
    recorded = {}
    for name, count in signpost_counts(signposts, category).items():
        try:
            metric = Metric(name)
        except ValueError:
            continue
        recorded[metric] = count
    return recorded
