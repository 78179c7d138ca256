"""Greedy monthly shift scheduling for doctors."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Sequence

MAX_DOCTORS = 50
MAX_NAME_LEN = 100
DAYS_IN_MONTH = 30
SHIFTS_PER_DAY = 3
MAX_DOCTORS_PER_SHIFT = 2
MAX_WEEKS = 5
DOCTORS_PER_SHIFT = 2
INPUT_FILE = "data/daftar_dokter.csv"
OUTPUT_FILE = "data/jadwal_dokter.csv"

DAY_NAMES = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")
SCHEDULE_HEADER = "Tanggal,Hari,Shift,Nama_Dokter,Bidang,Tingkat"

_MIN_SCORE = -9999
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LINE_END = re.compile(r"[\r\n]")


class SchedulingError(Exception):
    """Raised when doctors cannot be loaded or a schedule cannot be saved."""


class ShiftType(enum.IntEnum):
    PAGI = 0
    SIANG = 1
    MALAM = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Tingkat(enum.IntEnum):
    KOASS = 0
    RESIDEN = 1
    SPESIALIS = 2
    KONSULEN = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class PreferensiWaktu(enum.IntEnum):
    AWAL_BULAN = 0
    AKHIR_BULAN = 1
    CAMPUR = 2


@dataclass
class Doctor:
    """A doctor with scheduling preferences and running shift counters."""

    name: str
    bidang: str
    tingkat: Tingkat
    max_shifts_per_week: int
    preferred_shift: ShiftType
    preferred_time: PreferensiWaktu
    total_shifts_assigned: int = 0
    weekly_shifts: list[int] = field(default_factory=lambda: [0] * MAX_WEEKS)


@dataclass
class ShiftSlot:
    """One shift of one day (day is zero-based) and the doctors assigned to it."""

    day: int
    shift: ShiftType
    doctor_ids: list[int] = field(default_factory=list)


def parse_shift(text: str | None) -> ShiftType:
    """Find a shift name inside text; default to the morning shift."""
    if text:
        for shift in ShiftType:
            if shift.label in text:
                return shift
    return ShiftType.PAGI


def parse_tingkat(text: str | None) -> Tingkat:
    """Find a seniority level inside text; default to Koass."""
    if text:
        for level in Tingkat:
            if level.label in text:
                return level
    return Tingkat.KOASS


def parse_waktu(text: str | None) -> PreferensiWaktu:
    """Find a time-of-month preference inside text; default to mixed."""
    if text:
        if "Awal" in text:
            return PreferensiWaktu.AWAL_BULAN
        if "Akhir" in text:
            return PreferensiWaktu.AKHIR_BULAN
    return PreferensiWaktu.CAMPUR


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse_doctor_line(line: str) -> Doctor | None:
    line = _LINE_END.split(line, maxsplit=1)[0]
    tokens = [token for token in line.split(",") if token]
    if len(tokens) < 6:
        return None
    name, bidang, tingkat, max_text, shift_text, waktu_text = tokens[:6]
    if len(name) >= MAX_NAME_LEN or len(bidang) >= MAX_NAME_LEN:
        return None
    max_shifts = _atoi(max_text)
    if max_shifts <= 0:
        return None
    return Doctor(
        name=name,
        bidang=bidang,
        tingkat=parse_tingkat(tingkat),
        max_shifts_per_week=max_shifts,
        preferred_shift=parse_shift(shift_text),
        preferred_time=parse_waktu(waktu_text),
    )


def load_doctors(path: str | Path = INPUT_FILE) -> list[Doctor]:
    """Read up to MAX_DOCTORS valid doctors from a CSV file with a header row."""
    try:
        handle = open(path, encoding="utf-8", newline="")
    except OSError as exc:
        raise SchedulingError(f"cannot open {path}: {exc}") from exc
    doctors: list[Doctor] = []
    with handle:
        if not handle.readline():
            raise SchedulingError(f"{path} is empty")
        for line in handle:
            if len(doctors) >= MAX_DOCTORS:
                break
            doctor = _parse_doctor_line(line)
            if doctor is not None:
                doctors.append(doctor)
    if not doctors:
        raise SchedulingError(f"no valid doctors in {path}")
    return doctors


def calculate_score(doctor: Doctor, day: int, shift: int) -> int:
    """Score how well a doctor fits a shift on a zero-based day."""
    score = 15 if doctor.preferred_shift == shift else -5

    early = day <= 15
    preference = doctor.preferred_time
    if preference == PreferensiWaktu.CAMPUR:
        score += 5
    elif preference == PreferensiWaktu.AWAL_BULAN and early:
        score += 10
    elif preference == PreferensiWaktu.AKHIR_BULAN and not early:
        score += 10
    else:
        score -= 5

    score += 30 - doctor.total_shifts_assigned

    remaining = doctor.max_shifts_per_week - doctor.weekly_shifts[day // 7]
    score += remaining * 10 if remaining > 0 else remaining * 20

    score += int(doctor.tingkat) * 3
    return score


def _pick_best(doctors: Sequence[Doctor], slot: ShiftSlot) -> int | None:
    best_id: int | None = None
    best_score = _MIN_SCORE
    for doctor_id, doctor in enumerate(doctors):
        if doctor_id in slot.doctor_ids:
            continue
        score = calculate_score(doctor, slot.day, slot.shift)
        if score > best_score:
            best_score = score
            best_id = doctor_id
    return best_id


def _assign_shift(doctor: Doctor, day: int) -> None:
    doctor.total_shifts_assigned += 1
    doctor.weekly_shifts[day // 7] += 1


def generate_schedule(
    doctors: Sequence[Doctor], doctors_per_shift: int = DOCTORS_PER_SHIFT
) -> list[ShiftSlot]:
    """Fill every shift of the month greedily; updates the doctors' counters."""
    if not 1 <= doctors_per_shift <= MAX_DOCTORS_PER_SHIFT:
        raise ValueError(
            f"doctors_per_shift must be between 1 and {MAX_DOCTORS_PER_SHIFT}"
        )
    slots: list[ShiftSlot] = []
    for day in range(DAYS_IN_MONTH):
        for shift in ShiftType:
            slot = ShiftSlot(day, shift)
            while len(slot.doctor_ids) < doctors_per_shift:
                best = _pick_best(doctors, slot)
                if best is None:
                    break
                slot.doctor_ids.append(best)
                _assign_shift(doctors[best], day)
            slots.append(slot)
    return slots


def schedule_rows(
    doctors: Sequence[Doctor], slots: Iterable[ShiftSlot]
) -> Iterator[tuple[int, str, str, str, str, str]]:
    """Yield (date, day name, shift, name, field, level) for every assignment."""
    for slot in slots:
        shift = ShiftType(slot.shift)
        for doctor_id in slot.doctor_ids:
            doctor = doctors[doctor_id]
            yield (
                slot.day + 1,
                DAY_NAMES[slot.day % 7],
                shift.label,
                doctor.name,
                doctor.bidang,
                doctor.tingkat.label,
            )


def save_schedule(
    path: str | Path, doctors: Sequence[Doctor], slots: Iterable[ShiftSlot]
) -> None:
    """Write the schedule as CSV with the schedule header."""
    lines = [SCHEDULE_HEADER]
    lines.extend(
        ",".join(str(value) for value in row) for row in schedule_rows(doctors, slots)
    )
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write("\n".join(lines) + "\n")
    except OSError as exc:
        raise SchedulingError(f"cannot write {path}: {exc}") from exc