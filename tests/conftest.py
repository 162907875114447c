"""
Shared pytest fixtures: small in-memory record sets and a CSV on disk.
"""
from datetime import date

import pytest

from crash_dashboard.records import CrashRecord


def make_record(year, operator, fatalities, month=1, day=1, summary=""):
    return CrashRecord(
        date=date(year, month, day),
        year=year,
        operator=operator,
        fatalities=fatalities,
        summary=summary,
    )


@pytest.fixture
def scenario_records():
    return [
        make_record(1920, "A", 5),
        make_record(1920, "B", 10),
        make_record(1921, "A", 2),
    ]


@pytest.fixture
def sample_records():
    return [
        make_record(1908, "Military - U.S. Army", 1, 9, 17, "Demonstration flight."),
        make_record(1912, "Military - U.S. Navy", 5, 7, 12, "Airship exploded."),
        make_record(1912, "Private", 1, 8, 6),
        make_record(1913, "Military - German Navy", 14, 9, 9, "Hydrogen gas fire."),
        make_record(1913, "Military - German Navy", 28, 10, 17, "Airship LZ-18."),
        make_record(1913, "Private", 0, 11, 5),
        make_record(1913, "Military - German Army", 28, 12, 1, "Crashed in storm."),
        make_record(1915, "Military - German Navy", 20, 3, 5),
        make_record(1920, "Aeropostale", 4, 2, 2),
        make_record(1920, "Private", 4, 3, 3),
        make_record(2009, "Air France", 228, 6, 1, "Stalled over the Atlantic."),
    ]


CSV_TEXT = """Date,Time,Location,Operator,Flight #,Route,Type,Registration,cn/In,Aboard,Fatalities,Ground,Summary
09/17/1908,17:18,"Fort Myer, Virginia",Military - U.S. Army,,Demonstration,Wright Flyer III,,1,2,1,0,"During a demonstration flight, a U.S. Army flyer crashed."
07/12/1912,06:30,"Atlantic City, New Jersey",Military - U.S. Navy,,Test flight,Dirigible,,,5,5,0,First U.S. dirigible Akron exploded.
08/06/1913,,"Victoria, British Columbia, Canada",Private,,,Curtiss seaplane,,,1,,0,The first fatal airplane accident in Canada.
09/09/1913,18:30,Over the North Sea,Military - German Navy,,,Zeppelin L-1 (airship),,,20,14,0,The airship flew into a thunderstorm.
"""


@pytest.fixture
def crash_csv(tmp_path):
    path = tmp_path / "crashes.csv"
    path.write_text(CSV_TEXT)
    return path
