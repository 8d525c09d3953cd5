"""Reference data for survey normalization.

Column spellings, live-feed machine tokens and the flag groups built from
them. The live feed truncates question names to 30 characters, which is why
several field names below end mid-word.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Tuple

from gvp.normalization.flags import FlagGroup
from gvp.normalization.schema import (
    CANONICAL_COLUMNS,
    Disposer,
    Problem,
    Reason,
    Setting,
    Solution,
    WasteType,
)


def _canonical_columns(enum_cls: type[Enum]) -> Dict[str, Enum]:
    return {CANONICAL_COLUMNS[member]: member for member in enum_cls}


def _with_canonical(enum_cls: type[Enum], extra: Mapping[str, Enum]) -> Dict[str, Enum]:
    columns = _canonical_columns(enum_cls)
    columns.update(extra)
    return columns


# Cleaned-export per-category columns.
STATIC_WASTE_COLUMNS: Dict[str, WasteType] = {
    "Organic_and_Wet_Waste": WasteType.ORGANIC_WET,
    "Organic and Wet Waste": WasteType.ORGANIC_WET,
    "Plastic_Paper_Glass_Waste": WasteType.PLASTIC_PAPER_GLASS,
    "Plastic Paper Glass Waste": WasteType.PLASTIC_PAPER_GLASS,
    "Sanitary_and_Hazardous_Waste": WasteType.SANITARY_HAZARDOUS,
    "Sanitary and Hazardous Waste": WasteType.SANITARY_HAZARDOUS,
    "Battery_and_Bulb_Waste": WasteType.BATTERY_BULB,
    "Battery and Bulb Waste": WasteType.BATTERY_BULB,
    "Construction_and_Demolition_Waste": WasteType.CONSTRUCTION_DEMOLITION,
    "Construction and Demolition Waste": WasteType.CONSTRUCTION_DEMOLITION,
    "Clothes Waste": WasteType.CLOTHES,
    "Carcasses Waste": WasteType.CARCASSES,
    "Others": WasteType.OTHERS,
}

STATIC_REASON_COLUMNS: Dict[str, Reason] = {reason.value: reason for reason in Reason}

STATIC_PROBLEM_COLUMNS: Dict[str, Problem] = {problem.value: problem for problem in Problem}

# Live-feed multi-select tokens.
API_WASTE_TOKENS: Dict[str, WasteType] = {
    "wet_waste_organic_waste": WasteType.ORGANIC_WET,
    "dry_waste__plastic_paper_glass": WasteType.PLASTIC_PAPER_GLASS,
    "domestic_hazardous_sanitary_na": WasteType.SANITARY_HAZARDOUS,
    "e_waste_batteries__bulbs_etc": WasteType.BATTERY_BULB,
    "construction_and_demolition_wa": WasteType.CONSTRUCTION_DEMOLITION,
    "clothes": WasteType.CLOTHES,
    "carcasses": WasteType.CARCASSES,
    "others": WasteType.OTHERS,
}

API_DISPOSER_TOKENS: Dict[str, Disposer] = {
    "households": Disposer.HOUSEHOLDS,
    "vendors": Disposer.VENDORS,
    "people_from_outside": Disposer.PEOPLE_FROM_OUTSIDE,
    "passing_crowd": Disposer.PASSING_CROWD,
    "others": Disposer.OTHERS,
    "n_a": Disposer.OTHERS,
}

API_REASON_TOKENS: Dict[str, Reason] = {
    "no_regular_collection_vehicle": Reason.NO_REGULAR_COLLECTION,
    "anti_social_behaviour__youngsters_throwi": Reason.RANDOM_PEOPLE,
    "due_to_user_fee": Reason.USER_FEE,
    "mis_match_of_vehicle_time__many_people_l": Reason.VEHICLE_TIME,
    "due_to_narrow_road__difficult_for_vehicl": Reason.NARROW_ROAD,
    "because_of_market___street_vendors": Reason.MARKET_VENDORS,
}

API_PROBLEM_TOKENS: Dict[str, Problem] = {
    "bad_odour": Problem.BAD_ODOUR,
    "mosquitoes": Problem.MOSQUITOS,
    "stray_animals": Problem.STRAY_ANIMALS,
    "congestion": Problem.CONGESTION,
    "other": Problem.OTHER,
}

API_SOLUTION_TOKENS: Dict[str, Solution] = {
    "strict_enforcement_measures": Solution.STRICT_ENFORCEMENT,
    "bins_and_facilities": Solution.BINS_FACILITIES,
    "public_awareness__education": Solution.PUBLIC_AWARENESS,
    "sanitization_vehicle_roster": Solution.SANITIZATION_ROSTER,
    "technology_enabledmonitoring": Solution.TECHNOLOGY_MONITORING,
    "efficient_waste_collectionsystem": Solution.EFFICIENT_COLLECTION,
    "regulatory___administrativesupport": Solution.REGULATORY_SUPPORT,
    "neutral_feedback": Solution.NEUTRAL,
    "n_a": Solution.NEUTRAL,
}

WASTE_TYPE_FLAGS = FlagGroup(
    name="waste_type",
    columns=_with_canonical(WasteType, STATIC_WASTE_COLUMNS),
    token_fields=("What_kind_of_waste_do_you_obse",),
    token_map=API_WASTE_TOKENS,
)

DISPOSER_FLAGS = FlagGroup(
    name="disposer",
    columns=_canonical_columns(Disposer),
    token_fields=("Who_disposes_the_waste_at_the_",),
    token_map=API_DISPOSER_TOKENS,
)

REASON_FLAGS = FlagGroup(
    name="reason",
    columns=_with_canonical(Reason, STATIC_REASON_COLUMNS),
    token_fields=("What_might_be_the_reason_for_w",),
    token_map=API_REASON_TOKENS,
)

PROBLEM_FLAGS = FlagGroup(
    name="problem",
    columns=_with_canonical(Problem, STATIC_PROBLEM_COLUMNS),
    token_fields=("What_kind_of_problems_do_you_e",),
    token_map=API_PROBLEM_TOKENS,
)

SOLUTION_FLAGS = FlagGroup(
    name="solution",
    columns=_canonical_columns(Solution),
    token_fields=("What_solutions_do_you_think_wo",),
    token_map=API_SOLUTION_TOKENS,
)

SETTING_FLAGS = FlagGroup(name="setting", columns=_canonical_columns(Setting))

# Free-text answers classified through a keyword taxonomy (FIELD_ALIASES keys).
DISPOSER_TEXT_FIELDS: Tuple[str, ...] = ("who_dispose_1", "who_dispose_2", "who_dispose_3")
SOLUTION_TEXT_FIELDS: Tuple[str, ...] = ("solution_text_1", "solution_text_2", "solution_text_3")
SETTING_TEXT_FIELD = "setting_text"
