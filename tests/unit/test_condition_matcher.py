"""Tests for single-condition matching (field/operator/value against a payload)."""

import pytest

from studio.services.rule_engine import condition_matches


def _cond(field, operator, value):
    return {"field": field, "operator": operator, "value": value}


def test_equals_matches_same_string() -> None:
    assert condition_matches(_cond("mime_type", "equals", "image/png"), {"mime_type": "image/png"})


def test_equals_rejects_different_string() -> None:
    assert not condition_matches(_cond("mime_type", "equals", "image/png"), {"mime_type": "image/jpeg"})


def test_equals_is_case_sensitive() -> None:
    assert not condition_matches(_cond("detected_type", "equals", "Tattoo"), {"detected_type": "tattoo"})


def test_equals_compares_numbers_numerically() -> None:
    assert condition_matches(_cond("size", "equals", 2), {"size": 2.0})


@pytest.mark.parametrize(
    "expected, actual",
    [
        ("5", 5),
        (5, "5"),
        (True, 1),
        (1, True),
    ],
)
def test_equals_is_type_aware(expected, actual) -> None:
    """Values of different kinds never compare equal."""
    assert not condition_matches(_cond("artist_id", "equals", expected), {"artist_id": actual})


def test_not_equals_negates_equals() -> None:
    assert condition_matches(_cond("new_status", "not_equals", "failed"), {"new_status": "completed"})
    assert not condition_matches(_cond("new_status", "not_equals", "failed"), {"new_status": "failed"})


def test_not_equals_on_missing_field_is_not_satisfied() -> None:
    assert not condition_matches(_cond("new_status", "not_equals", "failed"), {})


def test_contains_substring() -> None:
    """Scenario E: 'tat' is contained in 'tattoo'."""
    assert condition_matches(_cond("detected_type", "contains", "tat"), {"detected_type": "tattoo"})
    assert not condition_matches(_cond("filename", "contains", "sketch"), {"filename": "back-piece.png"})


def test_contains_array_membership() -> None:
    payload = {"has_tags": ["tattoo", "body-art"]}
    assert condition_matches(_cond("has_tags", "contains", "body-art"), payload)
    assert not condition_matches(_cond("has_tags", "contains", "body"), payload)


def test_contains_on_number_is_not_satisfied() -> None:
    assert not condition_matches(_cond("size", "contains", "1"), {"size": 10})


def test_greater_than() -> None:
    """Scenario C: size > 5."""
    cond = _cond("size", "greater_than", 5)
    assert condition_matches(cond, {"size": 10})
    assert not condition_matches(cond, {"size": 3})
    assert not condition_matches(cond, {"size": 5})
    assert not condition_matches(cond, {"size": "large"})


def test_less_than() -> None:
    cond = _cond("min_confidence", "less_than", 0.5)
    assert condition_matches(cond, {"min_confidence": 0.2})
    assert not condition_matches(cond, {"min_confidence": 0.9})


def test_numeric_comparison_accepts_numeric_strings() -> None:
    assert condition_matches(_cond("size", "greater_than", "5"), {"size": "7.5"})


@pytest.mark.parametrize("actual", [True, "nan", None, [10], {"mb": 10}])
def test_numeric_comparison_rejects_non_numbers(actual) -> None:
    assert not condition_matches(_cond("size", "greater_than", 1), {"size": actual})


def test_missing_field_is_not_satisfied() -> None:
    assert not condition_matches(_cond("size", "less_than", 100), {"mime_type": "image/png"})


def test_none_value_counts_as_missing() -> None:
    assert not condition_matches(_cond("category", "equals", None), {"category": None})


def test_unknown_operator_is_not_satisfied() -> None:
    assert not condition_matches(_cond("size", "starts_with", "1"), {"size": "10"})


def test_missing_operator_defaults_to_equals() -> None:
    assert condition_matches({"field": "category", "value": "blackwork"}, {"category": "blackwork"})


def test_non_dict_condition_is_not_satisfied() -> None:
    assert not condition_matches("mime_type == image/png", {"mime_type": "image/png"})


def test_dotted_field_resolves_nested_payload() -> None:
    payload = {"media": {"mime_type": "image/webp"}}
    assert condition_matches(_cond("media.mime_type", "equals", "image/webp"), payload)


def test_numeric_comparison_handles_huge_integers() -> None:
    """Integers beyond float range compare without raising."""
    huge = 10**400
    assert condition_matches(_cond("artist_id", "greater_than", 5), {"artist_id": huge})
    assert not condition_matches(_cond("artist_id", "less_than", 5), {"artist_id": huge})
    assert condition_matches(_cond("artist_id", "less_than", huge), {"artist_id": "7"})


def test_equals_on_list_payload_is_membership() -> None:
    payload = {"has_tags": ["tattoo", "body-art"]}
    assert condition_matches(_cond("has_tags", "equals", "tattoo"), payload)
    assert not condition_matches(_cond("has_tags", "equals", "artwork"), payload)


def test_not_equals_on_list_payload_is_absence() -> None:
    payload = {"has_tags": ["tattoo"]}
    assert condition_matches(_cond("has_tags", "not_equals", "artwork"), payload)
    assert not condition_matches(_cond("has_tags", "not_equals", "tattoo"), payload)


def test_equals_on_empty_list_is_not_satisfied() -> None:
    assert not condition_matches(_cond("has_tags", "equals", "tattoo"), {"has_tags": []})
