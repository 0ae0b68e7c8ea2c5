"""
Value types for distance matrix requests and responses.

Request side: Coordinate, TravelMode, UnitSystem, AccountTier and CallGroup.
Response side: pydantic models mirroring the service's JSON payload.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from .matrix_errors import ClientConfigError


ELEMENT_OK = "OK"


def _format_degrees(value: float) -> str:
    # Shortest round-tripping form; integral degrees have no ".0" suffix.
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


@dataclass(frozen=True)
class Coordinate:
    """A geographic point in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")

        if not (-90 <= self.latitude <= 90):
            raise ValueError(f"Invalid latitude: {self.latitude}")
        if not (-180 <= self.longitude <= 180):
            raise ValueError(f"Invalid longitude: {self.longitude}")

    def __str__(self) -> str:
        return f"{_format_degrees(self.latitude)},{_format_degrees(self.longitude)}"


def join_coordinates(coordinates: Sequence[Coordinate]) -> str:
    """Serialize coordinates as pipe separated "lat,lon" tokens."""
    return "|".join(str(c) for c in coordinates)


class TravelMode(Enum):
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"
    DRIVING = "driving"

    def __str__(self) -> str:
        return self.value


class UnitSystem(Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    def __str__(self) -> str:
        return self.value


class AccountTier(Enum):
    """
    Account tier of the API credentials.

    Free accounts may request 100 elements per query (and 100 per 10 seconds);
    for-work accounts 625 per query (1000 per 10 seconds).
    """
    FREE = "free"
    FOR_WORK = "for-work"

    def __str__(self) -> str:
        return self.value

    @property
    def element_cap(self) -> int:
        if self is AccountTier.FREE:
            return 100
        if self is AccountTier.FOR_WORK:
            return 625
        raise ClientConfigError(f"Unknown account tier: {self!r}")

    @classmethod
    def parse(cls, value: Union["AccountTier", str]) -> "AccountTier":
        return parse_enum(cls, value, "account tier")


def parse_enum(enum_cls, value, label: str):
    """
    Coerce a member or its canonical string into ``enum_cls``.

    Raises:
        ClientConfigError: If the value names no member
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(member.value for member in enum_cls)
    raise ClientConfigError(f"Invalid {label}: {value!r}. Must be one of: {choices}")


class SplitAxis(Enum):
    """Which coordinate list a request was split along."""
    NONE = "none"
    ORIGINS = "origins"
    DESTINATIONS = "destinations"


@dataclass(frozen=True)
class CallGroup:
    """Origins and destinations sent together in one physical request."""
    origins: Tuple[Coordinate, ...]
    destinations: Tuple[Coordinate, ...]

    @property
    def element_count(self) -> int:
        return len(self.origins) * len(self.destinations)


class TextValue(BaseModel):
    text: str = ""
    value: float = 0


class Fare(BaseModel):
    currency: str = ""
    value: float = 0
    text: str = ""


class MatrixElement(BaseModel):
    """One origin-destination pair. Distance and duration are absent unless OK."""
    status: str
    distance: Optional[TextValue] = None
    duration: Optional[TextValue] = None
    fare: Optional[Fare] = None

    @property
    def ok(self) -> bool:
        return self.status == ELEMENT_OK


class MatrixRow(BaseModel):
    elements: List[MatrixElement] = Field(default_factory=list)


class DistanceMatrixResponse(BaseModel):
    """Distance matrix payload, either from one call or merged from several."""
    origin_addresses: List[str] = Field(default_factory=list)
    destination_addresses: List[str] = Field(default_factory=list)
    rows: List[MatrixRow] = Field(default_factory=list)
    status: str = ""
    error_message: Optional[str] = None

    def element_failures(self) -> Iterator[Tuple[int, int, str]]:
        """Yield (origin index, destination index, status) for every non-OK element."""
        for origin_index, row in enumerate(self.rows):
            for destination_index, element in enumerate(row.elements):
                if not element.ok:
                    yield origin_index, destination_index, element.status
