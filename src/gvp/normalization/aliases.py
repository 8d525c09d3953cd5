"""Field alias resolution across the cleaned-export and live-feed dialects.

Every canonical attribute maps to an ordered tuple of raw key spellings. The
canonical key itself comes first so that records which already carry canonical
names (for example ``NormalizedRecord.as_raw()`` output) resolve to the same
values again.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "gvp_id", "_id", "GVP_ID"),
    "ward_number": (
        "ward_number",
        "GVP Ward",
        "Select_the_ward",
        "GVP_Ward",
        "ward",
        "ward_no",
        "cluster_id",
    ),
    "city": ("city", "City"),
    "latitude": ("latitude", "_Record_the_location_of_GVP_latitude", "lat"),
    "longitude": ("longitude", "_Record_the_location_of_GVP_longitude", "lng"),
    "location": ("Record_the_location_of_GVP", "location"),
    "nearest_location": (
        "nearest_location",
        "Nearest_Location",
        "Nearest Location",
        "Nearest_Landmark_nearby_GVP",
    ),
    "photo_url": ("photo_url", "Photo URL"),
    "video_url": ("video_url", "Video URL"),
    "waste_quantity": (
        "waste_quantity",
        "Approx_Waste_Quantity_Found_at_GVP",
        "Approx Waste Quantity Found at GVP",
        "Waste Quantity",
        "approx_waste_quantity_found_at_gvp",
        "ApproxWasteQuantityFoundatGVP",
        "Approx_quantity_of_waste_at_GV",
    ),
    "setting_text": (
        "In_what_setting_is_the_GVP_pre",
        "Location Type",
        "other",
        "Kindly_specify_the_area",
    ),
    "who_dispose_1": ("Who Dispose1", "Who_Dispose1"),
    "who_dispose_2": ("Who Dispose2", "Who_Dispose2"),
    "who_dispose_3": ("Who Dispose3", "Who_Dispose3"),
    "solution_text_1": ("Solution Suggested by Interviewee1", "Solution_Suggested_by_Interviewee1"),
    "solution_text_2": ("Solution Suggested by Interviewee2", "Solution_Suggested_by_Interviewee2"),
    "solution_text_3": ("Solution Suggested by Interviewee3", "Solution_Suggested_by_Interviewee3"),
}

# Display-only answers carried through untouched apart from whitespace cleanup.
DETAIL_ALIASES: Dict[str, Tuple[str, ...]] = {
    "civic_authority_session": ("civic_authority_session", "Civic Authority Conduct Any Session", "Have_the_civic_authorities_con"),
    "complained_to_authority": (
        "complained_to_authority",
        "Have Interviewees Complained to Authority",
        "Have_you_complained_to_the_aut",
    ),
    "complaint_experience": ("complaint_experience", "If Yes How Was Your Experience ", "If_yes_how_was_your_experienc"),
    "notice_frequency": ("notice_frequency", "Notice Frequency", "How_frequently_do_you_notice_g"),
    "interviewee_disposal": (
        "interviewee_disposal",
        "Where Interviewee Dispose Their Waste",
        "Where_do_you_dispose_off_your_",
    ),
    "women_count": ("women_count", "No of Women", "group_ya6xw95_row/group_ya6xw95_row_column"),
    "men_count": ("men_count", "No of Men", "group_ya6xw95_row/group_ya6xw95_row_column_1"),
    "waste_cleared_off": ("waste_cleared_off", "Does Waste Clear Off", "Does_waste_get_cleared_off_fro"),
    "when_cleared_off": ("when_cleared_off", "When Waste Cleared Off", "If_yes_when_does_the_waste_ge"),
}

MEDIA_PLACEHOLDERS = ("N/A",)
DETAIL_PLACEHOLDERS = ("n_a",)
PHOTO_MIMETYPE = "image/jpeg"
VIDEO_MIMETYPE = "video/mp4"

_LINE_BREAKS = re.compile(r"[\r\n]+")
# Plain ASCII decimal notation only.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _is_blank(value: Any, placeholders: Iterable[str] = ()) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return True
        lowered = stripped.lower()
        return any(lowered == placeholder.lower() for placeholder in placeholders)
    return False


def resolve_any(raw: Mapping[str, Any], keys: Iterable[str], *, placeholders: Iterable[str] = ()) -> Any:
    """Return the first present, non-blank value among ``keys``."""
    placeholders = tuple(placeholders)
    for key in keys:
        value = raw.get(key)
        if not _is_blank(value, placeholders):
            return value
    return None


def resolve(raw: Mapping[str, Any], canonical_name: str, *, placeholders: Iterable[str] = ()) -> Any:
    """Resolve ``canonical_name`` through its alias list.

    Args:
        raw: Raw record in either dialect.
        canonical_name: Key of :data:`FIELD_ALIASES` or :data:`DETAIL_ALIASES`.
        placeholders: Strings treated as empty (compared case-insensitively).

    Returns:
        The first usable value, or ``None``.

    Raises:
        KeyError: If ``canonical_name`` has no alias entry.
    """
    aliases = FIELD_ALIASES.get(canonical_name) or DETAIL_ALIASES[canonical_name]
    return resolve_any(raw, aliases, placeholders=placeholders)


def to_float(value: Any) -> Optional[float]:
    """Parse a finite float, returning ``None`` for anything unparseable.

    Strings must be plain decimal numbers; digit separators such as ``"1_2"``
    are rejected. Integers too large for a float are ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not _DECIMAL.fullmatch(value):
            return None
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(parsed) or math.isinf(parsed):
        return None
    return parsed


def to_number(value: Any) -> Optional[float]:
    """Like :func:`to_float` but returns an ``int`` for integral values."""
    parsed = to_float(value)
    if parsed is not None and parsed.is_integer():
        return int(parsed)
    return parsed


def collapse_whitespace(value: Any) -> Optional[str]:
    """Collapse runs of whitespace into single spaces; ``None`` if nothing remains."""
    if value is None:
        return None
    collapsed = " ".join(str(value).split())
    return collapsed or None


def clean_display(value: Any) -> str:
    return _LINE_BREAKS.sub(" ", str(value).strip())


def resolve_ward(raw: Mapping[str, Any]) -> Optional[float]:
    return to_number(resolve(raw, "ward_number"))


def resolve_id(raw: Mapping[str, Any]) -> Optional[str]:
    value = resolve(raw, "id")
    if value is None:
        return None
    return str(value).strip()


def resolve_coordinates(raw: Mapping[str, Any]) -> Tuple[Optional[float], Optional[float]]:
    """Return ``(latitude, longitude)``.

    Discrete latitude/longitude fields win. When either is missing, a combined
    ``"lat lng [alt acc]"`` string is split on whitespace and each half that
    parses as a float replaces the discrete value.
    """
    lat = resolve(raw, "latitude")
    lng = resolve(raw, "longitude")
    combined = resolve(raw, "location")
    if (lat is None or lng is None) and combined is not None:
        parts = str(combined).split()
        if len(parts) >= 2:
            parsed_lat = to_float(parts[0])
            parsed_lng = to_float(parts[1])
            lat = parsed_lat if parsed_lat is not None else lat
            lng = parsed_lng if parsed_lng is not None else lng
    return to_float(lat), to_float(lng)


def _attachment_url(raw: Mapping[str, Any], mimetype: str) -> str:
    attachments = raw.get("_attachments")
    if not isinstance(attachments, list):
        return ""
    for attachment in attachments:
        if isinstance(attachment, Mapping) and attachment.get("mimetype") == mimetype:
            url = attachment.get("download_url") or attachment.get("downloadUrl")
            return str(url) if url else ""
    return ""


def resolve_media(raw: Mapping[str, Any]) -> Tuple[str, str]:
    """Return ``(photo_url, video_url)``, never ``"N/A"``, empty when absent."""
    photo = resolve(raw, "photo_url", placeholders=MEDIA_PLACEHOLDERS)
    video = resolve(raw, "video_url", placeholders=MEDIA_PLACEHOLDERS)
    photo_url = str(photo).strip() if photo is not None else _attachment_url(raw, PHOTO_MIMETYPE)
    video_url = str(video).strip() if video is not None else _attachment_url(raw, VIDEO_MIMETYPE)
    return photo_url, video_url


def resolve_details(raw: Mapping[str, Any]) -> Dict[str, str]:
    details: Dict[str, str] = {}
    for name in DETAIL_ALIASES:
        value = resolve(raw, name, placeholders=DETAIL_PLACEHOLDERS)
        if value is not None:
            details[name] = clean_display(value)
    return details
