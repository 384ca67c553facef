from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Mapping, Optional, TypedDict, Union


Number = Union[int, float]


class UserProfile(TypedDict, total=False):
    name: str
    email: str
    phone: str
    displayName: str


class Job(TypedDict, total=False):
    clientName: str
    type: str
    date: str
    time: str
    rate: Union[Number, str]
    currency: str
    status: str
    paymentStatus: str
    location: str
    notes: str


class Event(TypedDict, total=False):
    type: str
    clientName: str
    date: str
    startTime: str
    location: str
    dayRate: Union[Number, str]
    currency: str
    notes: str


# AI jobs share the job shape; only the default type label differs.
AiJob = Job


class Agency(TypedDict, total=False):
    name: str
    city: str
    country: str
    commissionRate: Number


class Agent(TypedDict, total=False):
    name: str
    email: str
    phone: str
    city: str
    country: str


class Meeting(TypedDict, total=False):
    clientName: str
    date: str
    time: str
    location: str


class Stay(TypedDict, total=False):
    locationName: str
    checkInDate: str
    checkOutDate: str
    cost: Union[Number, str]
    currency: str


class Shooting(TypedDict, total=False):
    clientName: str
    date: str
    location: str
    rate: Union[Number, str]
    currency: str


COLLECTION_KEYS = (
    "jobs",
    "events",
    "aiJobs",
    "agencies",
    "agents",
    "meetings",
    "onStays",
    "shootings",
)

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def normalize_bundle(bundle: Any) -> Dict[str, Any]:
    """Return a bundle with every recognized key present.

    ``None`` (or a non-mapping bundle) becomes the all-empty bundle and
    ``None`` category values become empty lists. Anything else is passed
    through untouched so that a malformed category fails on its own.
    """
    source: Mapping[str, Any] = bundle if isinstance(bundle, Mapping) else {}
    normalized: Dict[str, Any] = {"userProfile": source.get("userProfile") or {}}
    for key in COLLECTION_KEYS:
        value = source.get(key)
        normalized[key] = [] if value is None else value
    return normalized


def as_records(collection: Any) -> List[Dict[str, Any]]:
    if collection is None:
        return []
    if not isinstance(collection, (list, tuple)):
        raise TypeError(f"expected a list of records, got {type(collection).__name__}")
    return [item if isinstance(item, dict) else {} for item in collection]


def is_present(value: Any) -> bool:
    """Truthiness the way the client apps send data: 0, '' and None are absent."""
    if value is None or value is False:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_amount(value: Any) -> float:
    """Read a rate-like value; strings contribute their leading number."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return 0.0
        amount = float(match.group(0))
    else:
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


def display(value: Any, default: Optional[str] = None) -> str:
    """Render a field value, falling back to ``default`` when absent."""
    if not is_present(value):
        return default if default is not None else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
