"""Canonical schema definitions for normalized survey records.

Defines the category enums shared by the classifier, the normalizer and the
aggregation layer, plus the immutable :class:`NormalizedRecord` produced for
every raw survey row regardless of which channel it came from.

Enum declaration order is significant: it is the tie-break order used when two
aggregated labels share the same percentage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

DEFAULT_CITY = "Nagpur"


class WasteType(Enum):
    """Kinds of waste observed at a GVP."""

    ORGANIC_WET = "Organic & Wet"
    PLASTIC_PAPER_GLASS = "Plastic Paper Glass"
    SANITARY_HAZARDOUS = "Sanitary & Hazardous"
    BATTERY_BULB = "Battery & Bulb"
    CONSTRUCTION_DEMOLITION = "Construction & Demolition"
    CLOTHES = "Clothes"
    CARCASSES = "Carcasses"
    OTHERS = "Others"


class Disposer(Enum):
    """Who disposes the waste at the point."""

    HOUSEHOLDS = "Households"
    VENDORS = "Vendors"
    PEOPLE_FROM_OUTSIDE = "People from Outside"
    PASSING_CROWD = "Passing Crowd"
    OTHERS = "Others"


class Reason(Enum):
    """Reasons given for waste accumulating at the point."""

    NO_REGULAR_COLLECTION = "No Regular Collection Vehicle"
    RANDOM_PEOPLE = "Random People Throwing Garbage"
    USER_FEE = "Due To User Fee"
    VEHICLE_TIME = "Mismatch of Vehicle Time"
    NARROW_ROAD = "Due to Narrow Road"
    MARKET_VENDORS = "Because of Market and Street Vendors"


class Problem(Enum):
    """Nuisances reported by people living near the point."""

    BAD_ODOUR = "Bad Odour"
    MOSQUITOS = "Mosquitos"
    STRAY_ANIMALS = "Stray Animals"
    CONGESTION = "Congestion"
    OTHER = "Other"


class Solution(Enum):
    """Remedies proposed by interviewees."""

    BINS_FACILITIES = "Bins and Facilities"
    TECHNOLOGY_MONITORING = "Technology-Enabled Monitoring"
    STRICT_ENFORCEMENT = "Strict Enforcement Measures"
    PUBLIC_AWARENESS = "Public Awareness & Education"
    SANITIZATION_ROSTER = "Sanitization Vehicle Roster"
    REGULATORY_SUPPORT = "Regulatory & Administrative Support"
    EFFICIENT_COLLECTION = "Efficient Waste Collection System"
    NEUTRAL = "Neutral Feedback"


class Setting(Enum):
    """Physical setting the point is located in."""

    RESIDENTIAL = "Residential Area"
    NALLAH_DRAIN = "Nallah / Drain"
    MARKET = "Market / Commercial Area"
    PLAYGROUND = "Playground / Open Space"
    SCHOOL = "School / Institution"
    OPEN_PLOT = "Open Plot / Vacant Land"
    ROADSIDE = "Roadside / Footpath / Public Path"
    WATER_BODY = "Water Body / Lake Area"
    OTHER = "Other / Miscellaneous"


# Canonical 0/1 column emitted by NormalizedRecord.as_raw() for each category.
CANONICAL_COLUMNS: Dict[Enum, str] = {
    WasteType.ORGANIC_WET: "waste_organic_wet",
    WasteType.PLASTIC_PAPER_GLASS: "waste_plastic_paper_glass",
    WasteType.SANITARY_HAZARDOUS: "waste_sanitary_hazardous",
    WasteType.BATTERY_BULB: "waste_battery_bulb",
    WasteType.CONSTRUCTION_DEMOLITION: "waste_construction_demolition",
    WasteType.CLOTHES: "waste_clothes",
    WasteType.CARCASSES: "waste_carcasses",
    WasteType.OTHERS: "waste_others",
    Disposer.HOUSEHOLDS: "dispose_households",
    Disposer.VENDORS: "dispose_vendors",
    Disposer.PEOPLE_FROM_OUTSIDE: "dispose_people_outside",
    Disposer.PASSING_CROWD: "dispose_passing_crowd",
    Disposer.OTHERS: "dispose_others",
    Reason.NO_REGULAR_COLLECTION: "reason_no_collection",
    Reason.RANDOM_PEOPLE: "reason_random_people",
    Reason.USER_FEE: "reason_user_fee",
    Reason.VEHICLE_TIME: "reason_vehicle_time",
    Reason.NARROW_ROAD: "reason_narrow_road",
    Reason.MARKET_VENDORS: "reason_market_vendors",
    Problem.BAD_ODOUR: "problem_bad_odour",
    Problem.MOSQUITOS: "problem_mosquitos",
    Problem.STRAY_ANIMALS: "problem_stray_animals",
    Problem.CONGESTION: "problem_congestion",
    Problem.OTHER: "problem_other",
    Solution.BINS_FACILITIES: "solution_bins_facilities",
    Solution.TECHNOLOGY_MONITORING: "solution_technology_monitoring",
    Solution.STRICT_ENFORCEMENT: "solution_strict_enforcement",
    Solution.PUBLIC_AWARENESS: "solution_public_awareness",
    Solution.SANITIZATION_ROSTER: "solution_sanitization_roster",
    Solution.REGULATORY_SUPPORT: "solution_regulatory_support",
    Solution.EFFICIENT_COLLECTION: "solution_efficient_collection",
    Solution.NEUTRAL: "solution_neutral",
    Setting.RESIDENTIAL: "setting_residential",
    Setting.NALLAH_DRAIN: "setting_nallah",
    Setting.MARKET: "setting_market",
    Setting.PLAYGROUND: "setting_playground",
    Setting.SCHOOL: "setting_school",
    Setting.OPEN_PLOT: "setting_open_plot",
    Setting.ROADSIDE: "setting_roadside",
    Setting.WATER_BODY: "setting_water_body",
    Setting.OTHER: "setting_other",
}


@dataclass(frozen=True)
class NormalizedRecord:
    """Unified, immutable representation of one surveyed GVP.

    Attributes:
        id: Stable identity supplied by either source, stringified.
        ward_number: Administrative ward; also the clustering key.
        city: City the point belongs to.
        latitude: Latitude in decimal degrees, ``None`` if unparseable.
        longitude: Longitude in decimal degrees, ``None`` if unparseable.
        nearest_location: Landmark text with whitespace collapsed.
        photo_url: Photo link, empty string when absent.
        video_url: Video link, empty string when absent.
        waste_types: Waste categories observed.
        waste_quantity: Normalized quantity bucket token (e.g. ``below_500_kg``).
        waste_weight_units: Numeric weight derived from ``waste_quantity``.
        disposers: Who disposes the waste.
        reasons: Reasons for accumulation.
        problems: Nuisances reported.
        solutions: Remedies suggested.
        setting: Physical setting of the point.
        details: Display-only answers keyed by canonical detail name, read-only.
            Excluded from the hash.
    """

    id: Optional[str] = None
    ward_number: Optional[float] = None
    city: str = DEFAULT_CITY
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    nearest_location: Optional[str] = None
    photo_url: str = ""
    video_url: str = ""
    waste_types: FrozenSet[WasteType] = frozenset()
    waste_quantity: Optional[str] = None
    waste_weight_units: float = 0.0
    disposers: FrozenSet[Disposer] = frozenset()
    reasons: FrozenSet[Reason] = frozenset()
    problems: FrozenSet[Problem] = frozenset()
    solutions: FrozenSet[Solution] = frozenset()
    setting: Setting = Setting.OTHER
    details: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        for name in ("waste_types", "disposers", "reasons", "problems", "solutions"):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def cluster_id(self) -> Optional[float]:
        """Ward number, used as the clustering key."""
        return self.ward_number

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def as_raw(self) -> Dict[str, Any]:
        """Return the record as a flat raw mapping using canonical keys.

        Normalizing the returned mapping yields a record equal to ``self``.
        """
        raw: Dict[str, Any] = {
            "id": self.id,
            "ward_number": self.ward_number,
            "city": self.city,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "nearest_location": self.nearest_location,
            "photo_url": self.photo_url,
            "video_url": self.video_url,
            "waste_quantity": self.waste_quantity,
        }
        flagged = (
            set(self.waste_types)
            | set(self.disposers)
            | set(self.reasons)
            | set(self.problems)
            | set(self.solutions)
            | {self.setting}
        )
        for category, column in CANONICAL_COLUMNS.items():
            raw[column] = 1 if category in flagged else 0
        raw.update(self.details)
        return raw
