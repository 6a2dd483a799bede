# utils/catalog.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Example catalog: bundled logs and the patterns that parse them

"""Example catalog loading.

The catalog is a JSON list of entries describing bundled example logs:

    [
      {"filename": "two_hosts.log", "title": "Two hosts",
       "order": 1, "parser": "(?<host>\\\\S+) (?<clock>{.*})\\\\n(?<event>.*)"}
    ]

`delimiter` is optional. Log files are resolved relative to the directory
holding the catalog.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from utils.logger import get_logger

REQUIRED_KEYS = ("filename", "title", "parser")


class CatalogFormatError(Exception):
    """Exception raised when the example catalog is malformed."""

    pass


@dataclass(frozen=True)
class CatalogEntry:
    filename: str
    title: str
    parser: str
    order: int = 0
    delimiter: Optional[str] = None
    base_dir: Path = Path(".")

    @property
    def path(self) -> Path:
        return self.base_dir / self.filename


def load_catalog(filepath: Union[str, Path]) -> List[CatalogEntry]:
    """Load catalog entries sorted by their `order` hint.

    Raises:
        CatalogFormatError: If the file is missing, not JSON, or an entry
            lacks a required key
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise CatalogFormatError(f"Catalog file not found: {filepath}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogFormatError(f"Catalog is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CatalogFormatError("Catalog must be a JSON list of entries")

    entries = []
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise CatalogFormatError(f"Catalog entry {position} is not an object")
        missing = [key for key in REQUIRED_KEYS if key not in item]
        if missing:
            raise CatalogFormatError(f"Catalog entry {position} is missing keys: {missing}")
        try:
            order = int(item.get("order", position))
        except (TypeError, ValueError) as e:
            raise CatalogFormatError(f"Catalog entry {position} has an invalid order: {e}") from e

        entries.append(
            CatalogEntry(
                filename=item["filename"],
                title=item["title"],
                parser=item["parser"],
                order=order,
                delimiter=item.get("delimiter") or None,
                base_dir=path.parent,
            )
        )

    logger.debug(f"Loaded {len(entries)} catalog entries from {filepath}")
    # stable sort keeps file order for equal hints
    return sorted(entries, key=lambda entry: entry.order)


def find_entry(entries: List[CatalogEntry], name: str) -> CatalogEntry:
    """Find an entry by filename or title.

    Raises:
        CatalogFormatError: If no entry matches
    """
    for entry in entries:
        if name in (entry.filename, entry.title):
            return entry
    raise CatalogFormatError(f"No catalog entry named {name!r}")
