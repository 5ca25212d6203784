# tests/test_weights.py

from engine.sources import GradeSources
from engine.weights import (
    WeightCheck,
    check_all_weights,
    check_criterion_weights,
    check_instrument_weights,
    check_outcome_weights,
    check_period_weights,
)
from models.course_defaults import default_criteria, default_instruments, default_outcomes


def _default_sources():
    return GradeSources(
        instruments=default_instruments(),
        outcomes=default_outcomes(),
        criteria=default_criteria(),
    )


def test_weight_check_difference():
    check = WeightCheck("outcomes", 90, 100)

    assert check.difference == -10
    assert not check.is_balanced
    assert check.to_dict()["balanced"] is False


def test_default_course_weights():
    sources = _default_sources()

    assert all(check.is_balanced for check in check_period_weights(sources))
    assert check_outcome_weights(sources).is_balanced
    assert check_instrument_weights(sources).is_balanced


def test_criterion_weights_surface_undrafted_criteria():
    checks = {check.label: check for check in check_criterion_weights(_default_sources())}

    assert checks["criteria:cocina_basica"].is_balanced
    # only med_001 and med_002 exist so far
    assert checks["criteria:cocina_mediterranea"].total == 45
    assert checks["criteria:panaderia_pasteleria"].total == 30


def test_check_all_weights_lists_every_table():
    labels = [check.label for check in check_all_weights(_default_sources())]

    assert labels[:4] == ["period:t1", "period:t2", "period:t3", "period:rec"]
    assert "outcomes" in labels
    assert labels[-1] == "instruments"
