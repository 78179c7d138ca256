"""Doctor performance reports built from a schedule and doctor preferences."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Sequence

MAX_ENTRIES = 1000
WEEKS = 5
SHIFT_NAMES = ("Pagi", "Siang", "Malam")
INPUT_FILE_JADWAL = "data/jadwal_dokter.csv"
INPUT_FILE_DOKTER = "data/daftar_dokter.csv"
REPORT_FILE = "data/laporan_dokter.csv"
REPORT_HEADER = (
    "Nama,Bidang,Tingkat,Total_Shift,Max_Per_Minggu,Pref_Shift,Pref_Waktu,"
    "Pelanggaran,Minggu_1,Minggu_2,Minggu_3,Minggu_4,Minggu_5,"
    "Shift_Pagi,Shift_Siang,Shift_Malam"
)

_PATTERNS = {
    "d": re.compile(r"\s*([+-]?\d+)"),
    "set": re.compile(r"([^,]+)"),
    "s": re.compile(r"\s*(\S+)"),
}
_SHIFT_FORMAT = ("d", "set", "set", "set", "set", "s")
_DOCTOR_FORMAT = ("set", "set", "set", "d", "set", "s")


class ReportError(Exception):
    """Raised when report input cannot be read or report output cannot be written."""


@dataclass
class ShiftEntry:
    tanggal: int = 0
    hari: str = ""
    shift: str = ""
    nama: str = ""
    bidang: str = ""
    tingkat: str = ""


@dataclass
class DoctorPref:
    nama: str = ""
    bidang: str = ""
    tingkat: str = ""
    max_shift_per_minggu: int = 0
    preferensi_shift: str = ""
    preferensi_waktu: str = ""


@dataclass
class DoctorReport:
    """Per-doctor totals: shifts, shifts per week, shifts per type and violations."""

    pref: DoctorPref
    total_shift: int = 0
    weekly: list[int] = field(default_factory=lambda: [0] * WEEKS)
    per_type: list[int] = field(default_factory=lambda: [0] * len(SHIFT_NAMES))
    pelanggaran: int = 0


def shift_index(shift: str) -> int | None:
    """Position of a shift name among Pagi, Siang, Malam, or None."""
    try:
        return SHIFT_NAMES.index(shift)
    except ValueError:
        return None


def time_matches(pref: str, day: int) -> bool:
    """Whether a day of the month suits a time-of-month preference."""
    if pref in ("Awal", "AwalBulan"):
        return 1 <= day <= 15
    if pref in ("Akhir", "AkhirBulan"):
        return 16 <= day <= 31
    return True


def _scan(line: str, kinds: Sequence[str]) -> list:
    values: list = []
    pos = 0
    for position, kind in enumerate(kinds):
        if position:
            if not line.startswith(",", pos):
                break
            pos += 1
        match = _PATTERNS[kind].match(line, pos)
        if not match:
            break
        text = match.group(1)
        values.append(int(text) if kind == "d" else text)
        pos = match.end()
    return values


def _data_lines(path: str | Path) -> list[str]:
    try:
        with open(path, encoding="utf-8") as handle:
            lines = handle.readlines()
    except OSError as exc:
        raise ReportError(f"cannot open {path}: {exc}") from exc
    return lines[1:]


def _load(path: str | Path, kinds: Sequence[str], factory) -> list:
    records = []
    for line in _data_lines(path):
        if not line.strip():
            continue
        if len(records) >= MAX_ENTRIES:
            raise ReportError(f"{path} holds more than {MAX_ENTRIES} entries")
        records.append(factory(*_scan(line, kinds)))
    return records


def load_shift_entries(path: str | Path = INPUT_FILE_JADWAL) -> list[ShiftEntry]:
    """Read schedule rows (after the header) from a CSV file."""
    return _load(path, _SHIFT_FORMAT, ShiftEntry)


def load_doctor_prefs(path: str | Path = INPUT_FILE_DOKTER) -> list[DoctorPref]:
    """Read doctor preference rows (after the header) from a CSV file."""
    return _load(path, _DOCTOR_FORMAT, DoctorPref)


def _name_index(prefs: Sequence[DoctorPref]) -> dict[str, int]:
    index: dict[str, int] = {}
    for position, pref in enumerate(prefs):
        index.setdefault(pref.nama, position)
    return index


def _week_of(day: int) -> int:
    week = int((day - 1) / 7)
    if not 0 <= week < WEEKS:
        raise ReportError(f"day {day} lies outside the month")
    return week


def build_report(
    entries: Sequence[ShiftEntry], prefs: Sequence[DoctorPref]
) -> list[DoctorReport]:
    """Count shifts and preference violations for every doctor, in prefs order."""
    reports = [DoctorReport(pref) for pref in prefs]
    index = _name_index(prefs)
    for entry in entries:
        position = index.get(entry.nama)
        if position is None:
            continue
        report = reports[position]
        pref = report.pref
        week = _week_of(entry.tanggal)

        report.total_shift += 1
        report.weekly[week] += 1
        kind = shift_index(entry.shift)
        if kind is not None:
            report.per_type[kind] += 1

        if report.weekly[week] > pref.max_shift_per_minggu:
            report.pelanggaran += 1
        if entry.shift != pref.preferensi_shift:
            report.pelanggaran += 1
        if not time_matches(pref.preferensi_waktu, entry.tanggal):
            report.pelanggaran += 1
    return reports


def write_report(path: str | Path, reports: Sequence[DoctorReport]) -> None:
    """Write the performance report CSV."""
    lines = [REPORT_HEADER]
    for report in reports:
        pref = report.pref
        fields = [
            pref.nama,
            pref.bidang,
            pref.tingkat,
            report.total_shift,
            pref.max_shift_per_minggu,
            pref.preferensi_shift,
            pref.preferensi_waktu,
            report.pelanggaran,
            *report.weekly,
            *report.per_type,
        ]
        lines.append(",".join(str(value) for value in fields))
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write("\n".join(lines) + "\n")
    except OSError as exc:
        raise ReportError(f"cannot write {path}: {exc}") from exc


def _report_rows(path: str | Path) -> Iterator[list[str]]:
    for line in _data_lines(path):
        tokens = [token for token in line.rstrip("\r\n").split(",") if token]
        if tokens:
            yield tokens


def _field_for(path: str | Path, name: str, column: int) -> str | None:
    for tokens in _report_rows(path):
        if tokens[0] == name:
            return tokens[column] if len(tokens) > column else None
    return None


def find_total_shift(path: str | Path, name: str) -> str | None:
    """Total shift column of the first report row for name, or None."""
    return _field_for(path, name, 3)


def find_violation_count(path: str | Path, name: str) -> str | None:
    """Violation column of the first report row for name, or None."""
    return _field_for(path, name, 7)


def _atoi(text: str) -> int:
    match = _PATTERNS["d"].match(text)
    return int(match.group(1)) if match else 0


def violation_counts(path: str | Path) -> list[tuple[str, int]]:
    """(name, violations) for every complete report row."""
    return [
        (tokens[0], _atoi(tokens[7]))
        for tokens in _report_rows(path)
        if len(tokens) >= 8
    ]


def schedule_violations(
    entries: Sequence[ShiftEntry], prefs: Sequence[DoctorPref]
) -> list[str]:
    """Describe each preference violation, with weeks counted from Mondays."""
    week_of_day: dict[int, int] = {}
    current = 0
    for entry in entries:
        if entry.hari == "Senin" and not week_of_day.get(entry.tanggal):
            current += 1
        week_of_day[entry.tanggal] = current

    index = _name_index(prefs)
    weekly: Counter[tuple[int, int]] = Counter()
    messages: list[str] = []
    for entry in entries:
        position = index.get(entry.nama)
        if position is None:
            continue
        pref = prefs[position]
        week = week_of_day[entry.tanggal] - 1
        weekly[position, week] += 1

        if entry.shift != pref.preferensi_shift:
            messages.append(
                f"[{entry.tanggal}] {entry.nama} - Shift tidak sesuai preferensi "
                f"(jadwal: {entry.shift}, preferensi: {pref.preferensi_shift})"
            )
        if not time_matches(pref.preferensi_waktu, entry.tanggal):
            messages.append(
                f"[{entry.tanggal}] {entry.nama} - Waktu tidak sesuai preferensi "
                f"(jadwal tanggal: {entry.tanggal}, "
                f"preferensi: {pref.preferensi_waktu} bulan)"
            )
        if weekly[position, week] > pref.max_shift_per_minggu:
            messages.append(
                f"[{entry.tanggal}] {entry.nama} - Melebihi shift mingguan maksimum "
                f"({pref.max_shift_per_minggu} per minggu)"
            )
    return messages