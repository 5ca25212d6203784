# engine/weights.py

"""
Reports on declared weights.

Weights are expected to add up to a fixed total (100 % for outcomes, criteria within an
outcome, and instrument weight-in-course; 1.0 for instruments within a period). Nothing
rejects a configuration that does not; these checks only surface the difference so the
instructor can see and fix it.
"""

from __future__ import annotations

import math

from engine.sources import GradeSources


class WeightCheck:

    def __init__(self, label: str, total: float, expected: float):
        self._label = label
        self._total = total
        self._expected = expected

    @property
    def label(self) -> str:
        return self._label

    @property
    def total(self) -> float:
        return self._total

    @property
    def expected(self) -> float:
        return self._expected

    @property
    def difference(self) -> float:
        return self._total - self._expected

    @property
    def is_balanced(self) -> bool:
        return math.isclose(self._total, self._expected, abs_tol=1e-9)

    def to_dict(self) -> dict:
        return {
            "label": self._label,
            "total": self._total,
            "expected": self._expected,
            "difference": self.difference,
            "balanced": self.is_balanced,
        }

    def __repr__(self) -> str:
        return f"WeightCheck({self._label}, {self._total}, {self._expected})"


def check_period_weights(sources: GradeSources) -> list[WeightCheck]:
    return [
        WeightCheck(f"period:{period.key}", period.total_weight, 1.0)
        for period in sources.structure.periods
    ]


def check_outcome_weights(sources: GradeSources) -> WeightCheck:
    total = sum(outcome.weight for outcome in sources.outcomes.values())
    return WeightCheck("outcomes", total, 100.0)


def check_criterion_weights(sources: GradeSources) -> list[WeightCheck]:
    checks = []
    for outcome in sources.outcomes.values():
        total = sum(
            sources.criteria[c].weight
            for c in outcome.criterion_ids
            if c in sources.criteria
        )
        checks.append(WeightCheck(f"criteria:{outcome.id}", total, 100.0))

    return checks


def check_instrument_weights(sources: GradeSources) -> WeightCheck:
    total = sum(i.weight_in_course for i in sources.instruments.values())
    return WeightCheck("instruments", total, 100.0)


def check_all_weights(sources: GradeSources) -> list[WeightCheck]:
    return [
        *check_period_weights(sources),
        check_outcome_weights(sources),
        *check_criterion_weights(sources),
        check_instrument_weights(sources),
    ]
