"""Text views of a saved schedule: calendar, daily, weekly and monthly tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

SCHEDULE_FILE = "data/jadwal_dokter.csv"
DAYS_IN_MONTH = 30
WEEKS_IN_MONTH = 5
DAY_HEADERS = ("Sen", "Sel", "Rab", "Kam", "Jum", "Sab", "Min")
RULE = "-" * 109
SAME_SHIFT_MARK = "___________"

_ROW_PATTERN = re.compile(
    r"\s*([+-]?\d+),([^,]+),([^,]+),([^,]+),([^,]+),([^\n]+)"
)


@dataclass(frozen=True)
class ScheduleRow:
    """One doctor assigned to one shift on one day of the month."""

    tanggal: int
    hari: str
    shift: str
    nama: str
    bidang: str
    tingkat: str


def _parse_row(line: str) -> ScheduleRow | None:
    match = _ROW_PATTERN.match(line)
    if match is None:
        return None
    tanggal, hari, shift, nama, bidang, tingkat = match.groups()
    return ScheduleRow(int(tanggal), hari, shift, nama, bidang, tingkat.rstrip("\r"))


def read_schedule(path: str | Path = SCHEDULE_FILE) -> list[ScheduleRow]:
    """Read every schedule row of a CSV file; the header and malformed lines are skipped."""
    with open(path, encoding="utf-8", newline="") as handle:
        return [row for row in map(_parse_row, handle) if row is not None]


def render_calendar() -> str:
    """A month grid of 30 days starting on Monday."""
    lines = [" ".join(f"{name:<3}" for name in DAY_HEADERS), "-" * 27]
    days = list(range(1, DAYS_IN_MONTH + 1))
    for start in range(0, len(days), 7):
        lines.append("".join(f"{day:3d} " for day in days[start : start + 7]))
    return "\n".join(lines) + "\n"


def _table_header(title: str) -> list[str]:
    return [
        title,
        "",
        f"{'Tanggal':<5} | {'Hari':<15} | {'Nama Dokter':<20} | "
        f"{'Spesialisasi':<27} | {'Tingkatan':<14} | {'Jam Praktek':<15}",
        RULE,
    ]


def _table_body(rows: Iterable[ScheduleRow]) -> list[str]:
    lines: list[str] = []
    previous: ScheduleRow | None = None
    for row in rows:
        same_day = previous is not None and previous.hari == row.hari
        same_shift = same_day and previous.shift == row.shift
        people = f"{row.nama:<20} | {row.bidang:<27} | {row.tingkat:<15}"
        if same_shift:
            lines.append(f"{' ':<7} | {' ':<15} | {people}|{SAME_SHIFT_MARK:<15}")
        elif same_day:
            lines.append(f"{' ':<7} | {' ':<15} | {people}| {row.shift:<15}")
        else:
            lines.append(RULE)
            lines.append(f"{row.tanggal:<7} | {row.hari:<15} | {people}| {row.shift:<15}")
        previous = row
    return lines


def _render(title: str, rows: Iterable[ScheduleRow]) -> str:
    return "\n".join(_table_header(title) + _table_body(rows)) + "\n"


def render_daily(rows: Sequence[ScheduleRow], day: int) -> str:
    """Table of the shifts on one day (1-30)."""
    if not 1 <= day <= DAYS_IN_MONTH:
        raise ValueError(f"day must be between 1 and {DAYS_IN_MONTH}")
    title = f"{'-' * 43} Jadwal Tanggal ke - {day} {'-' * 43}"
    return _render(title, (row for row in rows if row.tanggal == day))


def render_weekly(rows: Sequence[ScheduleRow], week: int) -> str:
    """Table of the shifts in one seven-day week (1-5) of the month."""
    if not 1 <= week <= WEEKS_IN_MONTH:
        raise ValueError(f"week must be between 1 and {WEEKS_IN_MONTH}")
    first = 7 * week - 6
    title = f"{'-' * 44} Jadwal Minggu ke - {week} {'-' * 43}"
    return _render(title, (row for row in rows if first <= row.tanggal < first + 7))


def render_monthly(rows: Sequence[ScheduleRow]) -> str:
    """Table of every shift in the schedule."""
    title = f"{'-' * 47} Jadwal Bulanan {'-' * 46}"
    return _render(title, rows)