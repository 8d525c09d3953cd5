"""Unit tests for boolean flag normalization."""

from __future__ import annotations

import pytest

from gvp.normalization.flags import FlagGroup, collect_flags, expand_multi_select, normalize_flag
from gvp.normalization.reference_data import API_WASTE_TOKENS, PROBLEM_FLAGS, WASTE_TYPE_FLAGS
from gvp.normalization.schema import Problem, WasteType


@pytest.mark.parametrize("value", [1, "1", "1_0", True, 1.0, " 1 ", "TRUE"])
def test_normalize_flag_truthy(value) -> None:
    assert normalize_flag(value) == 1


@pytest.mark.parametrize("value", [0, "0", "0_0", False, None, "", "maybe", 2, [], {}])
def test_normalize_flag_falsy(value) -> None:
    assert normalize_flag(value) == 0


def test_expand_multi_select_ignores_unknown_tokens() -> None:
    categories = expand_multi_select("clothes  unknown_token carcasses", API_WASTE_TOKENS)

    assert categories == frozenset({WasteType.CLOTHES, WasteType.CARCASSES})


def test_expand_multi_select_non_string_is_empty() -> None:
    assert expand_multi_select(None, API_WASTE_TOKENS) == frozenset()
    assert expand_multi_select(["clothes"], API_WASTE_TOKENS) == frozenset()


def test_collect_flags_merges_columns_and_tokens() -> None:
    raw = {
        "Organic and Wet Waste": "1_0",
        "Plastic Paper Glass Waste": "0_0",
        "What_kind_of_waste_do_you_obse": "clothes wet_waste_organic_waste",
    }

    assert collect_flags(raw, WASTE_TYPE_FLAGS) == frozenset({WasteType.ORGANIC_WET, WasteType.CLOTHES})


def test_collect_flags_never_lowers_a_raised_flag() -> None:
    # The token string does not mention mosquitoes; the column still counts.
    raw = {"Mosquitos": 1, "What_kind_of_problems_do_you_e": "bad_odour"}

    assert collect_flags(raw, PROBLEM_FLAGS) == frozenset({Problem.MOSQUITOS, Problem.BAD_ODOUR})


def test_collect_flags_without_token_fields() -> None:
    group = FlagGroup(name="only_columns", columns={"a": WasteType.CLOTHES})

    assert collect_flags({"a": True, "What_kind_of_waste_do_you_obse": "carcasses"}, group) == frozenset(
        {WasteType.CLOTHES}
    )
