"""Bundled crop catalog and lookup helpers."""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from .exceptions import CropNotFound, InvalidRecord
from .models import Crop
from .schemas import crop_from_dict
from .utils import load_dataset, normalize_key

DATA_FILE = "crops/crop_catalog.json"

__all__ = [
    "load_crop_catalog",
    "list_crops",
    "list_crops_by_family",
    "get_crop",
    "catalog_frame",
]

CATALOG_COLUMNS = [
    "id",
    "name",
    "scientific_name",
    "family",
    "type",
    "nutrient_requirement",
    "water_requirement",
    "season",
    "growth_duration",
    "nitrogen_fixer",
    "is_active",
]


def load_crop_catalog() -> list[Crop]:
    """Return every catalog crop ordered by name.

    Entries are keyed by slug in the dataset. The slug doubles as the crop
    id when an entry does not define one.
    """

    data = load_dataset(DATA_FILE)
    if not isinstance(data, Mapping):
        raise InvalidRecord(f"Dataset {DATA_FILE} must be a mapping of crops")
    crops: list[Crop] = []
    for slug, entry in data.items():
        if not isinstance(entry, Mapping):
            raise InvalidRecord(f"Catalog entry {slug!r} must be a mapping")
        record = dict(entry)
        record.setdefault("id", slug)
        crops.append(crop_from_dict(record))
    return sorted(crops, key=lambda c: c.name.casefold())


def list_crops(
    family: str | None = None,
    nutrient_requirement: str | None = None,
    season: str | None = None,
    include_inactive: bool = False,
) -> list[Crop]:
    """Return catalog crops matching every given filter."""

    result = []
    for crop in load_crop_catalog():
        if not include_inactive and not crop.is_active:
            continue
        if family and normalize_key(crop.family) != normalize_key(family):
            continue
        if nutrient_requirement and crop.nutrient_requirement != normalize_key(nutrient_requirement):
            continue
        if season and normalize_key(season) not in crop.season:
            continue
        result.append(crop)
    return result


def list_crops_by_family(family: str) -> list[Crop]:
    """Return active crops belonging to ``family``."""
    return list_crops(family=family)


def get_crop(crop_id: str | int) -> Crop:
    """Return the catalog crop with ``crop_id``."""
    for crop in load_crop_catalog():
        if str(crop.id) == str(crop_id):
            return crop
    raise CropNotFound(f"Crop not found: {crop_id}")


def catalog_frame(crops: list[Crop] | None = None) -> pd.DataFrame:
    """Return ``crops`` (default: active catalog) as a DataFrame."""

    if crops is None:
        crops = list_crops()
    rows = []
    for crop in crops:
        row = crop.to_dict()
        row["season"] = ",".join(row["season"])
        rows.append({col: row.get(col) for col in CATALOG_COLUMNS})
    return pd.DataFrame(rows, columns=CATALOG_COLUMNS)
