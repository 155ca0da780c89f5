"""
Philippine administrative gazetteer: region -> province -> city/municipality -> barangay.

Design:
  - Every unit is an immutable AdminUnit row; the dataset is loaded once per process.
  - Four lookup tables (barangay, city, province, region) map a NormalizedKey to
    the ordered tuple of units sharing that key.
  - A key with more than one unit is ambiguous at that level. The ambiguity
    sets are computed once at build time and never change afterward.
  - Nicknames and renamed municipalities are folded into the city table at build
    time, so alias lookups look exactly like canonical lookups downstream.
  - Lookups never guess: an ambiguous name without a usable hint resolves to None,
    except for the explicit CITY_PRIORITY tie-break table.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ph_geo.config import get_settings
from ph_geo.normalize import normalize_key

logger = logging.getLogger(__name__)


class GazetteerError(Exception):
    """Malformed or missing gazetteer dataset. Fatal at startup."""


@dataclass(frozen=True)
class AdminUnit:
    region: str
    province: Optional[str] = None
    city: Optional[str] = None
    barangay: Optional[str] = None

    @property
    def level(self) -> str:
        if self.barangay:
            return "barangay"
        if self.city:
            return "city"
        if self.province:
            return "province"
        return "region"

    @property
    def city_key(self) -> str:
        return normalize_key(self.city)

    @property
    def province_key(self) -> str:
        return normalize_key(self.province)


# ══════════════════════════════════════════════════════════════════════
# ALIAS + PRIORITY TABLES
# ══════════════════════════════════════════════════════════════════════

# alias key -> canonical city key. Overrides whatever the alias key held before.
CITY_ALIASES: dict[str, str] = {
    "qc": "quezon city",
    "kyusi": "quezon city",
    "bgc": "taguig",
    "fort bonifacio": "taguig",
    "mnl": "manila",
    "mkt": "makati",
    "north caloocan": "caloocan city",
    "south caloocan": "caloocan city",
    "kalookan": "caloocan city",
    "gensan": "general santos city",
    "cdo": "cagayan de oro city",
    "gen trias": "general trias",
    "montalban": "rodriguez",
    "sjdm": "san jose del monte",
}

# Historically ambiguous city names -> province key prefix preferred when the
# text gives no province hint. Consulted only for ambiguous keys.
CITY_PRIORITY: dict[str, str] = {
    "bacolod": "negros occidental",
    "quezon": "national capital region",
    "san juan": "national capital region",
}

_CITY_SUFFIX = " city"


# ══════════════════════════════════════════════════════════════════════
# LOADING
# ══════════════════════════════════════════════════════════════════════

def _require(mapping: dict, field_name: str, where: str):
    if not isinstance(mapping, dict) or field_name not in mapping:
        raise GazetteerError(f"Missing '{field_name}' in {where}")
    return mapping[field_name]


def _iter_nested(data: dict) -> Iterator[AdminUnit]:
    """Walk {code: {region_name, province_list: {..: {municipality_list: {..: {barangay_list}}}}}}."""
    for code, region_data in data.items():
        region = _require(region_data, "region_name", f"region {code}")
        provinces = _require(region_data, "province_list", f"region {region}")
        yield AdminUnit(region=region)
        for province, province_data in provinces.items():
            cities = _require(province_data, "municipality_list", f"province {province}")
            yield AdminUnit(region=region, province=province)
            for city, city_data in cities.items():
                barangays = _require(city_data, "barangay_list", f"city {city}")
                yield AdminUnit(region=region, province=province, city=city)
                for barangay in barangays:
                    yield AdminUnit(region=region, province=province, city=city, barangay=barangay)


def _read_jsonl(file_path: Path) -> Iterator[AdminUnit]:
    with file_path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                row = json.loads(line)
                yield AdminUnit(**row)
            except (json.JSONDecodeError, TypeError) as e:
                raise GazetteerError(f"{file_path}:{line_no}: invalid row ({e})") from e


def load_gazetteer(path: str | Path) -> list[AdminUnit]:
    """
    Read the dataset into AdminUnit rows.
    Accepts the nested PSGC-style JSON or flat JSONL (one AdminUnit per line).
    """
    file_path = Path(path)
    if not file_path.exists():
        raise GazetteerError(f"Gazetteer dataset not found: {file_path}")

    if file_path.suffix == ".jsonl":
        return list(_read_jsonl(file_path))

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise GazetteerError(f"Gazetteer dataset is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise GazetteerError("Gazetteer dataset must be a JSON object keyed by region code")
    return list(_iter_nested(data))


# ══════════════════════════════════════════════════════════════════════
# INDEX
# ══════════════════════════════════════════════════════════════════════

class GazetteerIndex:
    """Read-only lookup tables over the administrative hierarchy."""

    def __init__(
        self,
        barangays: dict[str, tuple[AdminUnit, ...]],
        cities: dict[str, tuple[AdminUnit, ...]],
        provinces: dict[str, tuple[AdminUnit, ...]],
        regions: dict[str, tuple[AdminUnit, ...]],
    ):
        self._barangays = barangays
        self._cities = cities
        self._provinces = provinces
        self._regions = regions
        self._ambiguous_barangays = frozenset(
            k for k, units in barangays.items() if len(units) > 1
        )
        self._ambiguous_cities = frozenset(
            k for k, units in cities.items() if len(units) > 1
        )

    # ── Raw table access ──────────────────────────────────────────────

    def barangay_units(self, name: str) -> tuple[AdminUnit, ...]:
        return self._barangays.get(normalize_key(name), ())

    def city_units(self, name: str) -> tuple[AdminUnit, ...]:
        key = self._city_lookup_key(normalize_key(name))
        return self._cities.get(key, ()) if key else ()

    def province_units(self, name: str) -> tuple[AdminUnit, ...]:
        return self._provinces.get(normalize_key(name), ())

    def _city_lookup_key(self, key: str) -> str | None:
        """Try the key as-is, then with and without the ' city' suffix."""
        if not key:
            return None
        if key in self._cities:
            return key
        with_suffix = key + _CITY_SUFFIX
        if with_suffix in self._cities:
            return with_suffix
        if key.endswith(_CITY_SUFFIX):
            bare = key[: -len(_CITY_SUFFIX)]
            if bare in self._cities:
                return bare
        return None

    def _hint_city_keys(self, hint: str) -> set[str]:
        keys = {normalize_key(hint)}
        keys.update(u.city_key for u in self.city_units(hint))
        return keys

    def _hint_province_keys(self, hint: str) -> set[str]:
        keys = {normalize_key(hint)}
        keys.update(u.province_key for u in self.province_units(hint))
        return keys

    # ── Lookups ───────────────────────────────────────────────────────

    def find_barangay(
        self,
        name: str,
        city_hint: str | None = None,
        province_hint: str | None = None,
    ) -> AdminUnit | None:
        units = self.barangay_units(name)
        if not units:
            return None
        if len(units) == 1:
            return units[0]

        if city_hint:
            city_keys = self._hint_city_keys(city_hint)
            for unit in units:
                if unit.city_key in city_keys:
                    return unit
        if province_hint:
            province_keys = self._hint_province_keys(province_hint)
            matches = [u for u in units if u.province_key in province_keys]
            # Several same-named barangays in one province is still ambiguous
            if len(matches) == 1:
                return matches[0]
        return None

    def find_city(self, name: str, province_hint: str | None = None) -> AdminUnit | None:
        key = self._city_lookup_key(normalize_key(name))
        if key is None:
            return None
        units = self._cities[key]
        if len(units) == 1:
            return units[0]

        if province_hint:
            province_keys = self._hint_province_keys(province_hint)
            for unit in units:
                if unit.province_key in province_keys:
                    return unit
            return None

        preferred = CITY_PRIORITY.get(key)
        if preferred:
            for unit in units:
                if unit.province_key.startswith(preferred):
                    return unit
        return None

    def find_province(self, name: str) -> AdminUnit | None:
        units = self.province_units(name)
        return units[0] if len(units) == 1 else None

    def find_region(self, name: str) -> AdminUnit | None:
        units = self._regions.get(normalize_key(name), ())
        return units[0] if len(units) == 1 else None

    def is_ambiguous_barangay(self, name: str) -> bool:
        return normalize_key(name) in self._ambiguous_barangays

    def is_ambiguous_city(self, name: str) -> bool:
        key = self._city_lookup_key(normalize_key(name))
        return key in self._ambiguous_cities

    # ── Hierarchy checks ──────────────────────────────────────────────

    def validate_hierarchy(
        self,
        barangay: str | None,
        city: str | None,
        province: str | None,
    ) -> bool:
        """True if some unit in the gazetteer has exactly this barangay/city/province chain."""
        province_key = normalize_key(province)
        if barangay:
            city_keys = self._hint_city_keys(city) if city else set()
            return any(
                (not city_keys or u.city_key in city_keys)
                and (not province_key or u.province_key == province_key)
                for u in self.barangay_units(barangay)
            )
        if city:
            return any(
                not province_key or u.province_key == province_key
                for u in self.city_units(city)
            )
        if province:
            return bool(self.province_units(province))
        return False

    def contains_city(self, city: str, province: str) -> bool:
        return self.validate_hierarchy(None, city, province)

    def stats(self) -> dict[str, int]:
        return {
            "barangays": len(self._barangays),
            "cities": len(self._cities),
            "provinces": len(self._provinces),
            "regions": len(self._regions),
            "ambiguous_barangays": len(self._ambiguous_barangays),
            "ambiguous_cities": len(self._ambiguous_cities),
        }


def _append(table: dict[str, list[AdminUnit]], key: str, unit: AdminUnit) -> None:
    bucket = table.setdefault(key, [])
    if unit not in bucket:
        bucket.append(unit)


def _fold_city_aliases(cities: dict[str, list[AdminUnit]]) -> None:
    canonical = {k: list(v) for k, v in cities.items()}

    for key, units in canonical.items():
        if key.endswith(_CITY_SUFFIX):
            # "bacolod city" also answers to "bacolod", merging with any municipality of that name
            for unit in units:
                _append(cities, key[: -len(_CITY_SUFFIX)], unit)
        elif key + _CITY_SUFFIX not in canonical:
            for unit in units:
                _append(cities, key + _CITY_SUFFIX, unit)

    for alias, target in CITY_ALIASES.items():
        if target not in canonical:
            logger.debug("City alias %r skipped: %r not in dataset", alias, target)
            continue
        cities[alias] = list(canonical[target])


def build_index(rows: Iterable[AdminUnit]) -> GazetteerIndex:
    """
    Build the four lookup tables from AdminUnit rows.
    Barangay rows imply their city, province and region; explicit higher-level
    rows are accepted too. Raises GazetteerError on incomplete rows.
    """
    barangays: dict[str, list[AdminUnit]] = {}
    cities: dict[str, list[AdminUnit]] = {}
    provinces: dict[str, list[AdminUnit]] = {}
    regions: dict[str, list[AdminUnit]] = {}

    count = 0
    for row in rows:
        count += 1
        if not row.region:
            raise GazetteerError(f"Row without region: {row}")
        if row.barangay and not (row.city and row.province):
            raise GazetteerError(f"Barangay row without city/province: {row}")
        if row.city and not row.province:
            raise GazetteerError(f"City row without province: {row}")

        _append(regions, normalize_key(row.region), AdminUnit(region=row.region))
        if row.province:
            _append(provinces, normalize_key(row.province),
                    AdminUnit(region=row.region, province=row.province))
        if row.city:
            _append(cities, normalize_key(row.city),
                    AdminUnit(region=row.region, province=row.province, city=row.city))
        if row.barangay:
            _append(barangays, normalize_key(row.barangay), row)

    if count == 0:
        raise GazetteerError("Gazetteer dataset is empty")

    _fold_city_aliases(cities)

    index = GazetteerIndex(
        barangays={k: tuple(v) for k, v in barangays.items()},
        cities={k: tuple(v) for k, v in cities.items()},
        provinces={k: tuple(v) for k, v in provinces.items()},
        regions={k: tuple(v) for k, v in regions.items()},
    )
    logger.info("Gazetteer index built: %s", index.stats())
    return index


@lru_cache(maxsize=1)
def get_index() -> GazetteerIndex:
    """Process-wide index built from the configured dataset."""
    return build_index(load_gazetteer(get_settings().gazetteer.path))
