"""
Lookup tables for Grbl error and setting codes.

The tables ship as CSV files inside this package and are read once per
process. A ``Catalog`` is immutable after construction; ``GrblDevice``
takes one as a collaborator so tests can inject their own rows.
"""

import csv
import functools
import io
import logging
from dataclasses import dataclass
from importlib import resources
from typing import Dict, Iterable, Optional

ERROR_CODES_FILE = "error_codes.csv"
SETTING_CODES_FILE = "setting_codes.csv"


@dataclass(frozen=True)
class ErrorCode:
    code: str
    message: str
    description: str


@dataclass(frozen=True)
class SettingCode:
    code: str
    setting: str
    units: str
    description: str


class Catalog:
    """Read-only mapping of error and setting codes to descriptive text."""

    def __init__(self, errors: Iterable[ErrorCode] = (), settings: Iterable[SettingCode] = ()):
        self._errors: Dict[str, ErrorCode] = {row.code: row for row in errors}
        self._settings: Dict[str, SettingCode] = {row.code: row for row in settings}

    def error(self, code: str) -> Optional[ErrorCode]:
        return self._errors.get(code)

    def setting(self, code: str) -> Optional[SettingCode]:
        return self._settings.get(code)

    def __len__(self) -> int:
        return len(self._errors) + len(self._settings)


def _read_rows(filename: str):
    content = resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")
    return list(csv.DictReader(io.StringIO(content)))


@functools.lru_cache(maxsize=None)
def load_catalog() -> Catalog:
    """Loads the bundled Grbl 1.1 code tables."""
    log = logging.getLogger("Catalog")
    errors = [ErrorCode(r["code"], r["message"], r["description"]) for r in _read_rows(ERROR_CODES_FILE)]
    settings = [
        SettingCode(r["code"], r["setting"], r["units"], r["description"])
        for r in _read_rows(SETTING_CODES_FILE)
    ]
    log.debug(f"Loaded {len(errors)} error codes and {len(settings)} setting codes")
    return Catalog(errors, settings)
