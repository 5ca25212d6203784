# tests/test_evaluation_structure.py

import logging

import pytest

from models.grade_source import GradeSource, SourceKind
from models.period import DEFAULT_EVALUATION_STRUCTURE, EvaluationStructure


def _structure_with(instruments, period_key="t1"):
    return {
        "periods": [
            {"key": period_key, "name": "Periodo", "instruments": instruments},
        ]
    }


def test_default_structure_resolves_every_instrument():
    structure = EvaluationStructure.default()

    assert structure.period_keys == ["t1", "t2", "t3", "rec"]

    t2 = structure.get_period("t2")
    sources = {i.key: i.source for i in t2.instruments}

    assert sources["servicios"] == GradeSource.service_average("t2")
    assert sources["exPracticoT2"] == GradeSource.practical_exam("t2")
    assert sources["teorico1"] == GradeSource.manual("t2", "teorico1")

    rec = structure.get_period("rec")
    assert {i.key: i.source for i in rec.instruments}["exPracticoRec"].kind is SourceKind.PRACTICAL_EXAM


def test_default_weights_add_up_per_period():
    for period in EvaluationStructure.default().periods:
        assert period.total_weight == pytest.approx(1.0)


def test_unknown_calculated_key_fails_at_load():
    data = _structure_with(
        [{"key": "exPracticoT9", "name": "Ex. Práctico", "type": "calculated", "weight": 1.0}]
    )

    with pytest.raises(ValueError):
        EvaluationStructure.from_dict(data)


def test_service_instrument_in_remediation_fails_at_load():
    data = _structure_with(
        [{"key": "servicios", "name": "Servicios", "type": "calculated", "weight": 1.0}],
        period_key="rec",
    )

    with pytest.raises(ValueError):
        EvaluationStructure.from_dict(data)


def test_unknown_instrument_type_fails_at_load():
    data = _structure_with([{"key": "teorico1", "name": "Teórico", "type": "oral", "weight": 1.0}])

    with pytest.raises(ValueError):
        EvaluationStructure.from_dict(data)


def test_missing_field_fails_at_load():
    data = _structure_with([{"key": "teorico1", "type": "manual", "weight": 1.0}])

    with pytest.raises(ValueError):
        EvaluationStructure.from_dict(data)


def test_duplicate_period_fails_at_load():
    period = DEFAULT_EVALUATION_STRUCTURE["periods"][0]

    with pytest.raises(ValueError):
        EvaluationStructure.from_dict({"periods": [period, period]})


def test_unbalanced_weights_are_reported_not_rejected(caplog):
    data = _structure_with(
        [
            {"key": "teorico1", "name": "Teórico 1", "type": "manual", "weight": 0.5},
            {"key": "teorico2", "name": "Teórico 2", "type": "manual", "weight": 0.3},
        ]
    )

    with caplog.at_level(logging.WARNING, logger="models.period"):
        structure = EvaluationStructure.from_dict(data)

    assert structure.get_period("t1").total_weight == pytest.approx(0.8)
    assert "t1" in caplog.text


def test_structure_round_trip():
    structure = EvaluationStructure.default()

    assert EvaluationStructure.from_dict(structure.to_dict()).to_dict() == structure.to_dict()


def test_grade_source_validation():
    with pytest.raises(ValueError):
        GradeSource.service_average("rec")

    with pytest.raises(ValueError):
        GradeSource.manual("t1", "")

    with pytest.raises(ValueError):
        GradeSource.practical_exam("t4")

    source = GradeSource.manual("rec", "teoricoRec")
    assert GradeSource.from_dict(source.to_dict()) == source
