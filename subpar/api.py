"""Records and a client for the accessibility and station open-data endpoints."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import urlencode

import httpx

log = logging.getLogger(__name__)

T = TypeVar("T")

EQUIPMENT_URL = (
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fnyct_ene_equipments.json"
)
OUTAGES_URL = "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fnyct_ene.json"
COMPLEXES_URL = "https://data.ny.gov/resource/5f5g-n3cz.json"
ENTRANCES_URL = "https://data.ny.gov/resource/i9wp-a4ja.json"

PAGE_SIZE = 1000
MAX_PAGES = 10

OUTAGE_TZ = timezone(timedelta(hours=5))
_DATE_FORMAT = "%m/%d/%Y %I:%M:%S %p"

_TRUE_WORDS = frozenset({"T", "TRUE", "Y", "YES"})
_FALSE_WORDS = frozenset({"F", "FALSE", "N", "NO"})
_IGNORED_ROUTES = frozenset({"LIRR", "METRO-NORTH"})
_U32_MAX = 2**32 - 1


class ApiError(ValueError):
    """A response could not be fetched or did not have the expected shape."""


class AdaStatus(IntEnum):
    """Accessibility of a station complex."""

    NO = 0
    FULL = 1
    PARTIAL = 2


def parse_bool(value: Any) -> bool:
    """Parse a yes/no style flag (Y/N, T/F, YES/NO, TRUE/FALSE, or 0/1)."""
    if isinstance(value, str):
        if value in _TRUE_WORDS:
            return True
        if value in _FALSE_WORDS:
            return False
        raise ApiError(f"Unexpected bool str '{value}'")
    if isinstance(value, int) and not isinstance(value, bool):
        if value == 0:
            return False
        if value == 1:
            return True
        raise ApiError(f"bool should be 0 or 1, not {value}")
    raise ApiError(f"expected 'Y' or 'N', got {value!r}")


def parse_ada(value: Any) -> AdaStatus:
    """Parse an ADA status given as the string "0", "1" or "2"."""
    if not isinstance(value, str):
        raise ApiError(f"expected ADA status: 0-2, got {value!r}")
    try:
        return {"0": AdaStatus.NO, "1": AdaStatus.FULL, "2": AdaStatus.PARTIAL}[value]
    except KeyError:
        raise ApiError(f"ADA status '{value}' out of bounds") from None


def parse_date(value: Any) -> datetime:
    """Parse a timestamp such as "06/26/2023 09:35:00 AM"."""
    if not isinstance(value, str):
        raise ApiError(f"expected datetime formatted string, got {value!r}")
    try:
        naive = datetime.strptime(value, _DATE_FORMAT)
    except ValueError as exc:
        raise ApiError(str(exc)) from exc
    return naive.replace(tzinfo=OUTAGE_TZ)


def parse_list(value: Any, delim: str, convert: Callable[[str], T] = str) -> list[T]:
    """Split a delimited string and convert every element."""
    if not isinstance(value, str):
        raise ApiError(f"expected '{delim}'-delimited list, got {value!r}")
    elems: list[T] = []
    for i, chunk in enumerate(value.split(delim)):
        try:
            elems.append(convert(chunk))
        except (ValueError, TypeError) as exc:
            name = getattr(convert, "__name__", repr(convert))
            raise ApiError(f"Elem {i} of '{value}' invalid {name}: {exc}") from exc
    return elems


def parse_route_list(value: Any) -> list[str]:
    """Parse a '/'-separated route list, dropping commuter-rail entries."""
    return [r for r in parse_list(value, "/") if r not in _IGNORED_ROUTES]


def _parse_float(value: Any) -> float:
    if not isinstance(value, str):
        raise ApiError(f"expected quoted float, got {value!r}")
    try:
        return float(value)
    except ValueError as exc:
        raise ApiError(f"float {exc}: {value}") from exc


def _parse_complex_id(value: Any) -> int:
    if not isinstance(value, str):
        raise ApiError(f"expected quoted complex id, got {value!r}")
    digits = value[1:] if value.startswith("+") else value
    if not digits or not all("0" <= c <= "9" for c in digits):
        raise ApiError(f"complex id invalid digit: {value}")
    number = int(digits)
    if number > _U32_MAX:
        raise ApiError(f"complex id too large: {value}")
    return number


def _parse_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ApiError(f"expected a string, got {value!r}")
    return value


def _parse_int(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ApiError(f"expected an integer, got {value!r}")
    return value


def _parse_optional_str(value: Any) -> str | None:
    return None if value is None else _parse_str(value)


def _field(data: Mapping[str, Any], key: str, parse: Callable[[Any], T] = _parse_str) -> T:
    if key not in data:
        raise ApiError(f"missing field `{key}`")
    try:
        return parse(data[key])
    except ApiError as exc:
        raise ApiError(f"{key}: {exc}") from exc


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ApiError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _slash_stops(value: Any) -> list[str]:
    return parse_list(value, "/")


def _space_list(value: Any) -> list[str]:
    return parse_list(value, " ")


def _semicolon_list(value: Any) -> list[str]:
    return parse_list(value, "; ")


@dataclass(frozen=True)
class AccessEquipment:
    """An elevator or escalator and what it serves."""

    station: str
    trains: tuple[str, ...]
    equipmentno: str
    equipmenttype: str
    serving: str
    ada: bool
    isactive: bool
    non_nyct: bool
    shortdescription: str
    linesservedbyelevator: tuple[str, ...]
    stop_ids: tuple[str, ...]
    elevatormrn: str
    complex_id: int
    nextadanorth: str
    nextadasouth: str
    redundant: int
    busconnections: str
    alternativeroute: str

    @classmethod
    def from_json(cls, data: Any) -> AccessEquipment:
        d = _require_mapping(data)
        return cls(
            station=_field(d, "station"),
            trains=tuple(_field(d, "trainno", parse_route_list)),
            equipmentno=_field(d, "equipmentno"),
            equipmenttype=_field(d, "equipmenttype"),
            serving=_field(d, "serving"),
            ada=_field(d, "ADA", parse_bool),
            isactive=_field(d, "isactive", parse_bool),
            non_nyct=_field(d, "nonNYCT", parse_bool),
            shortdescription=_field(d, "shortdescription"),
            linesservedbyelevator=tuple(_field(d, "linesservedbyelevator", parse_route_list)),
            stop_ids=tuple(_field(d, "elevatorsgtfsstopid", _slash_stops)),
            elevatormrn=_field(d, "elevatormrn"),
            complex_id=_field(d, "stationcomplexid", _parse_complex_id),
            nextadanorth=_field(d, "nextadanorth"),
            nextadasouth=_field(d, "nextadasouth"),
            redundant=_field(d, "redundant", _parse_int),
            busconnections=_field(d, "busconnections"),
            alternativeroute=_field(d, "alternativeroute"),
        )


@dataclass(frozen=True)
class SubwayEntrance:
    """A street entrance to a station."""

    division: str
    line: str
    borough: str
    stop_name: str
    complex_id: int
    constituent_station_name: str
    station_id: str
    stop_ids: tuple[str, ...]
    routes: tuple[str, ...]
    entrance_type: str
    entry_allowed: bool
    exit_allowed: bool
    entrance_latitude: float
    entrance_longitude: float

    @classmethod
    def from_json(cls, data: Any) -> SubwayEntrance:
        d = _require_mapping(data)
        return cls(
            division=_field(d, "division"),
            line=_field(d, "line"),
            borough=_field(d, "borough"),
            stop_name=_field(d, "stop_name"),
            complex_id=_field(d, "complex_id", _parse_complex_id),
            constituent_station_name=_field(d, "constituent_station_name"),
            station_id=_field(d, "station_id"),
            stop_ids=tuple(_field(d, "gtfs_stop_id", _space_list)),
            routes=tuple(_field(d, "daytime_routes", _space_list)),
            entrance_type=_field(d, "entrance_type"),
            entry_allowed=_field(d, "entry_allowed", parse_bool),
            exit_allowed=_field(d, "exit_allowed", parse_bool),
            entrance_latitude=_field(d, "entrance_latitude", _parse_float),
            entrance_longitude=_field(d, "entrance_longitude", _parse_float),
        )


def _parse_asof(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as exc:
            raise ApiError(str(exc)) from exc
    raise ApiError(f"expected a timestamp, got {value!r}")


@dataclass(frozen=True)
class AccessOutage:
    """A current or upcoming outage of an elevator or escalator."""

    station: str
    routes: tuple[str, ...]
    equipment: str
    equipmenttype: str
    serving: str
    ada: bool
    outagedate: datetime
    estimatedreturntoservice: datetime
    reason: str
    isupcomingoutage: bool
    ismaintenanceoutage: bool
    asof: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_json(cls, data: Any) -> AccessOutage:
        d = _require_mapping(data)
        asof = (
            _field(d, "asof", _parse_asof)
            if "asof" in d
            else datetime.now(timezone.utc)
        )
        return cls(
            station=_field(d, "station"),
            routes=tuple(_field(d, "trainno", parse_route_list)),
            equipment=_field(d, "equipment"),
            equipmenttype=_field(d, "equipmenttype"),
            serving=_field(d, "serving"),
            ada=_field(d, "ADA", parse_bool),
            outagedate=_field(d, "outagedate", parse_date),
            estimatedreturntoservice=_field(d, "estimatedreturntoservice", parse_date),
            reason=_field(d, "reason"),
            isupcomingoutage=_field(d, "isupcomingoutage", parse_bool),
            ismaintenanceoutage=_field(d, "ismaintenanceoutage", parse_bool),
            asof=asof,
        )


@dataclass(frozen=True)
class ComplexInfo:
    """A station complex: one or more stations joined by transfers."""

    complex_id: int
    is_complex: bool
    number_of_stations_in_complex: str
    stop_name: str
    display_name: str
    constituent_station_names: str
    stop_ids: tuple[str, ...]
    borough: str
    cbd: bool
    routes: tuple[str, ...]
    structure_type: str
    latitude: float
    longitude: float
    ada: AdaStatus
    ada_notes: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> ComplexInfo:
        d = _require_mapping(data)
        return cls(
            complex_id=_field(d, "complex_id", _parse_complex_id),
            is_complex=_field(d, "is_complex", parse_bool),
            number_of_stations_in_complex=_field(d, "number_of_stations_in_complex"),
            stop_name=_field(d, "stop_name"),
            display_name=_field(d, "display_name"),
            constituent_station_names=_field(d, "constituent_station_names"),
            stop_ids=tuple(_field(d, "gtfs_stop_ids", _semicolon_list)),
            borough=_field(d, "borough"),
            cbd=_field(d, "cbd", parse_bool),
            routes=tuple(_field(d, "daytime_routes", _space_list)),
            structure_type=_field(d, "structure_type"),
            latitude=_field(d, "latitude", _parse_float),
            longitude=_field(d, "longitude", _parse_float),
            ada=_field(d, "ada", parse_ada),
            ada_notes=_parse_optional_str(d.get("ada_notes")),
        )


class ApiClient:
    """Fetches the open-data JSON endpoints, keeping a copy of each response on disk."""

    def __init__(
        self,
        http: httpx.Client | None = None,
        cache_dir: str | Path | None = "cache",
    ) -> None:
        self._http = http if http is not None else httpx.Client()
        self._cache_dir = Path(cache_dir) if cache_dir is not None else None

    def get_equipment(self) -> list[AccessEquipment]:
        return self._get_list(EQUIPMENT_URL, "equipment.json", AccessEquipment.from_json)

    def get_outage(self) -> list[AccessOutage]:
        return self._get_list(OUTAGES_URL, "outages.json", AccessOutage.from_json)

    def get_outages_nocache(self) -> list[AccessOutage]:
        return self._get_list(OUTAGES_URL, None, AccessOutage.from_json)

    def get_complexes(self) -> list[ComplexInfo]:
        return self._get_list(COMPLEXES_URL, "complexes.json", ComplexInfo.from_json)

    def get_entrances(self) -> list[SubwayEntrance]:
        entrances: list[SubwayEntrance] = []
        for page in range(MAX_PAGES):
            params = [("$limit", str(PAGE_SIZE))]
            if page > 0:
                params.append(("$offset", str(page * PAGE_SIZE)))
            url = f"{ENTRANCES_URL}?{urlencode(params)}"
            batch = self._get_list(url, f"entrances.{page}.json", SubwayEntrance.from_json)
            entrances.extend(batch)
            if len(batch) < PAGE_SIZE:
                break
        return entrances

    def _fetch(self, url: str, cache_name: str | None) -> str:
        try:
            response = self._http.get(url)
            body = response.text
        except httpx.HTTPError as exc:
            raise ApiError(f"Failed to request {url}") from exc
        if cache_name is not None and self._cache_dir is not None:
            path = self._cache_dir / cache_name
            try:
                path.write_text(body, encoding="utf-8")
            except OSError as exc:
                log.warning("Failed to write response to disk %s: %s", path, exc)
        return body

    def _get_list(
        self, url: str, cache_name: str | None, parse: Callable[[Any], T]
    ) -> list[T]:
        log.debug("Fetching %s from %s", cache_name or url, url)
        body = self._fetch(url, cache_name)
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            raise ApiError(f"invalid JSON from {url}: {exc}") from exc
        if not isinstance(payload, list):
            raise ApiError(f"expected a JSON array from {url}")
        return [parse(item) for item in payload]