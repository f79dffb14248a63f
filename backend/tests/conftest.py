"""
Shared fixtures.

The database URL is pointed at a throwaway SQLite file before any silo
module creates its engine.
"""

import os
import tempfile
from io import BytesIO
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="silo-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"

import pytest
from openpyxl import Workbook

from silo.features.mapping.models import Mapping


# =============================================================================
# Sample data
# =============================================================================

COLUMNS = [
    "Naam", "Ranking", "Race", "Nat.", "Wedstrijd", "Locatie",
    "Afstand", "Datum", "Seizoen", "Sekse", "Tijd", "winnaar",
]

# (name, rank, race, nat, competition, location, distance, date, season, sex, time)
_RESULTS = [
    ("Anna", 1, "1", "NED", "WK Afstanden", "Inzell", "500m", "02-11-2019", "2019/2020", "V", "38.50"),
    ("Bea", 2, "1", "NED", "WK Afstanden", "Inzell", "500m", "02-11-2019", "2019/2020", "V", "38.90"),
    ("Cleo", 3, "1", "CAN", "WK Afstanden", "Inzell", "500m", "02-11-2019", "2019/2020", "V", "39.10"),
    ("Anna", 2, "1", "NED", "WK Afstanden", "Inzell", "1000m", "03-11-2019", "2019/2020", "V", "1:15.20"),
    ("Bea", 1, "1", "NED", "WK Afstanden", "Inzell", "1000m", "03-11-2019", "2019/2020", "V", "1:14.80"),
    ("Anna", 1, "2", "NED", "World Cup", "Heerenveen", "500m", "15-12-2018", "2018/2019", "V", "38.70"),
    ("Cleo", 2, "2", "CAN", "World Cup", "Heerenveen", "500m", "15-12-2018", "2018/2019", "V", "38.95"),
    ("Cleo", 1, "1", "CAN", "OS 2018", "Gangneung", "1000m", "14-02-2018", "2017/2018", "V", "1:13.56"),
    ("Anna", 3, "1", "NED", "OS 2018", "Gangneung", "1000m", "14-02-2018", "2017/2018", "V", "1:14.00"),
    ("Dirk", 1, "1", "NED", "NK Allround", "Thialf", "1500m", "20-01-2019", "2018/2019", "M", "1:45.30"),
]


def make_rows() -> list[dict]:
    rows = []
    for name, rank, race, nat, comp, loc, dist, day, season, sex, time in _RESULTS:
        rows.append({
            "Naam": name,
            "Ranking": rank,
            "Race": race,
            "Nat.": nat,
            "Wedstrijd": comp,
            "Locatie": loc,
            "Afstand": dist,
            "Datum": day,
            "Seizoen": season,
            "Sekse": sex,
            "Tijd": time,
            "winnaar": name if rank == 1 else "",
        })
    return rows


def make_workbook(rows: list[dict], columns=COLUMNS, sheet_title: str = "results", extra_sheets=()) -> bytes:
    """xlsx bytes with ``extra_sheets`` first and the data sheet last."""
    wb = Workbook()
    first = wb.active
    if extra_sheets:
        first.title = extra_sheets[0]
        for title in extra_sheets[1:]:
            wb.create_sheet(title)
        ws = wb.create_sheet(sheet_title)
    else:
        first.title = sheet_title
        ws = first

    ws.append(list(columns))
    for row in rows:
        ws.append([row.get(c) for c in columns])

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_xlsx():
    """Factory fixture: make_xlsx(rows, columns=..., sheet_title=..., extra_sheets=...)."""
    return make_workbook


@pytest.fixture
def results_rows() -> list[dict]:
    """Ten speed-skating results across four events."""
    return make_rows()


@pytest.fixture
def results_mapping() -> Mapping:
    return Mapping(
        competitor="Naam",
        rank="Ranking",
        race="Race",
        nationality="Nat.",
        competition="Wedstrijd",
        location="Locatie",
        distance="Afstand",
        date="Datum",
        season="Seizoen",
        sex="Sekse",
        time="Tijd",
        winner="winnaar",
    )
