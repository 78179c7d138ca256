"""Doctor registry with search, undo log and CSV persistence."""

from __future__ import annotations

import copy
import enum
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

LEN = 100
MAX_DOKTER = 100
DATA_FILE = "data/daftar_dokter.csv"
CSV_HEADER = (
    "nama,bidang,tingkat,max_shift_per_minggu,preferensi_shift,preferensi_waktu"
)
SEARCH_FIELDS = ("nama", "bidang", "tingkat")
_LINE_BUFFER = 256
_SEPARATOR = "---------------------------------"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class RegistryError(Exception):
    """Raised when a registry operation cannot be carried out."""


def _clip(text: str) -> str:
    return text[: LEN - 1]


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class DoctorRecord:
    """A doctor as kept in the registry and its CSV file."""

    nama: str
    bidang: str
    tingkat: str
    max_shift_per_minggu: int
    preferensi_shift: str
    preferensi_waktu: str

    def to_csv_line(self) -> str:
        return (
            f"{self.nama},{self.bidang},{self.tingkat},{self.max_shift_per_minggu},"
            f"{self.preferensi_shift},{self.preferensi_waktu}"
        )


class ActionType(enum.Enum):
    TAMBAH = "Tambah"
    HAPUS = "Hapus"


@dataclass
class Activity:
    """One undoable change: the action and a copy of the doctor involved."""

    tipe: ActionType
    doctor: DoctorRecord


def contains_keyword(text: str | None, keyword: str | None) -> bool:
    """Case-insensitive substring test on the first LEN-1 characters of each."""
    if text is None or keyword is None:
        return False
    return _clip(keyword).lower() in _clip(text).lower()


def _format_doctor(doctor: DoctorRecord, indent: str = "") -> list[str]:
    return [
        f"{indent}Bidang: {doctor.bidang}",
        f"{indent}Tingkat: {doctor.tingkat}",
        f"{indent}Max shift/minggu: {doctor.max_shift_per_minggu}",
        f"{indent}Preferensi Shift: {doctor.preferensi_shift}",
        f"{indent}Preferensi Waktu: {doctor.preferensi_waktu}",
        _SEPARATOR,
    ]


def format_search_results(doctors: list[DoctorRecord]) -> str:
    """Render search results as text."""
    if not doctors:
        return "Tidak ada data dokter yang cocok dengan kriteria pencarian.\n"
    lines = ["", "=== HASIL PENCARIAN DOKTER ==="]
    for doctor in doctors:
        lines.append(f"Nama: {doctor.nama}")
        lines.extend(_format_doctor(doctor))
    return "\n".join(lines) + "\n"


def format_all(doctors: list[DoctorRecord]) -> str:
    """Render the full numbered doctor list as text."""
    if not doctors:
        return "Belum ada data dokter.\n"
    lines = ["", "=== DATA DOKTER ==="]
    for number, doctor in enumerate(doctors, start=1):
        lines.append(f"{number}. Nama: {doctor.nama}")
        lines.extend(_format_doctor(doctor, indent="   "))
    return "\n".join(lines) + "\n"


def _parse_line(line: str) -> DoctorRecord | None:
    line = line[: _LINE_BUFFER - 1]
    line = line.split("\n", 1)[0].split("\r", 1)[0]
    tokens = [token for token in line.split(",") if token]
    if len(tokens) < 6:
        return None
    nama, bidang, tingkat, max_text, pref_shift, pref_waktu = tokens[:6]
    return DoctorRecord(
        nama=_clip(nama),
        bidang=_clip(bidang),
        tingkat=_clip(tingkat),
        max_shift_per_minggu=_atoi(max_text),
        preferensi_shift=_clip(pref_shift),
        preferensi_waktu=_clip(pref_waktu),
    )


class DoctorRegistry:
    """Doctors, newest first, with an undo log; saves to path after each change if set."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = path
        self.doctors: list[DoctorRecord] = []
        self.activities: list[Activity] = []

    def __iter__(self) -> Iterator[DoctorRecord]:
        return iter(self.doctors)

    def __len__(self) -> int:
        return len(self.doctors)

    def _autosave(self) -> None:
        if self.path is not None:
            self.save_csv(self.path)

    def _record(self, tipe: ActionType, doctor: DoctorRecord) -> None:
        self.activities.insert(0, Activity(tipe, copy.deepcopy(doctor)))

    def add(self, doctor: DoctorRecord) -> DoctorRecord:
        """Put a doctor at the front of the list; every text field must be filled."""
        for name in ("nama", "bidang", "tingkat", "preferensi_shift", "preferensi_waktu"):
            if not getattr(doctor, name):
                raise RegistryError(f"{name} tidak boleh kosong")
        stored = DoctorRecord(
            nama=_clip(doctor.nama),
            bidang=_clip(doctor.bidang),
            tingkat=_clip(doctor.tingkat),
            max_shift_per_minggu=int(doctor.max_shift_per_minggu),
            preferensi_shift=_clip(doctor.preferensi_shift),
            preferensi_waktu=_clip(doctor.preferensi_waktu),
        )
        self.doctors.insert(0, stored)
        self._record(ActionType.TAMBAH, stored)
        self._autosave()
        return stored

    def remove(self, name: str) -> DoctorRecord:
        """Remove the first doctor with exactly this name and return it."""
        if not name:
            raise RegistryError("Nama dokter tidak boleh kosong.")
        for position, doctor in enumerate(self.doctors):
            if doctor.nama == name:
                del self.doctors[position]
                self._record(ActionType.HAPUS, doctor)
                self._autosave()
                return doctor
        raise RegistryError("Dokter tidak ditemukan.")

    def undo(self) -> str:
        """Revert the most recent add or remove and describe what happened."""
        if not self.activities:
            raise RegistryError("Tidak ada aktivitas untuk dibatalkan.")
        activity = self.activities.pop(0)
        target = activity.doctor
        if activity.tipe is ActionType.TAMBAH:
            for position, doctor in enumerate(self.doctors):
                if doctor.nama == target.nama and doctor.bidang == target.bidang:
                    del self.doctors[position]
                    message = f"Undo: Penambahan dokter {target.nama} dibatalkan."
                    break
            else:
                message = (
                    f"Undo: Dokter {target.nama} tidak ditemukan dalam daftar aktif "
                    "(mungkin sudah dihapus/diedit)."
                )
        else:
            self.doctors.insert(0, target)
            message = f"Undo: Penghapusan dokter {target.nama} dibatalkan."
        self._autosave()
        return message

    def log_lines(self) -> list[str]:
        """Numbered activity descriptions, newest first."""
        return [
            f"{number}. {activity.tipe.value} dokter: {activity.doctor.nama}"
            for number, activity in enumerate(self.activities, start=1)
        ]

    def search(self, field: str, keyword: str) -> list[DoctorRecord]:
        """Copies of doctors whose field contains keyword, in reverse list order."""
        if field not in SEARCH_FIELDS:
            raise ValueError(f"field must be one of {', '.join(SEARCH_FIELDS)}")
        if not keyword:
            raise RegistryError("Keyword tidak boleh kosong.")
        return [
            copy.deepcopy(doctor)
            for doctor in reversed(self.doctors)
            if contains_keyword(getattr(doctor, field), keyword)
        ]

    def load_csv(self, path: str | Path = DATA_FILE) -> int:
        """Replace the registry with the doctors in a CSV file; return how many loaded.

        A missing file is created with just the header. Rows are kept newest
        first, so the last row of the file ends up at the front.
        """
        path = Path(path)
        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(CSV_HEADER + "\n", encoding="utf-8")
            except OSError as exc:
                raise RegistryError(f"Gagal membuat file {path}: {exc}") from exc
        try:
            with open(path, encoding="utf-8", newline="") as handle:
                if not handle.readline():
                    return 0
                self.clear()
                count = 0
                for line in handle:
                    if len(line) < 2:
                        continue
                    doctor = _parse_line(line)
                    if doctor is None:
                        continue
                    self.doctors.insert(0, doctor)
                    count += 1
        except OSError as exc:
            raise RegistryError(f"Gagal membuka file {path}: {exc}") from exc
        return count

    def save_csv(self, path: str | Path = DATA_FILE) -> None:
        """Write all doctors, in list order, under the CSV header."""
        path = Path(path)
        lines = [CSV_HEADER, *(doctor.to_csv_line() for doctor in self.doctors)]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as handle:
                handle.write("\n".join(lines) + "\n")
        except OSError as exc:
            raise RegistryError(f"Gagal membuka file {path} untuk menulis: {exc}") from exc

    def clear(self) -> None:
        """Drop every doctor and every logged activity."""
        self.doctors.clear()
        self.activities.clear()