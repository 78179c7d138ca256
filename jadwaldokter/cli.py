"""Interactive text menu for doctor management, scheduling, schedule views and reports."""

from __future__ import annotations

import argparse
import re
from pathlib import Path
from typing import Callable

from jadwaldokter.doctors import DoctorRecord, DoctorRegistry, RegistryError, format_all, format_search_results
from jadwaldokter.report import (
    ReportError,
    build_report,
    find_total_shift,
    find_violation_count,
    load_doctor_prefs,
    load_shift_entries,
    schedule_violations,
    violation_counts,
    write_report,
)
from jadwaldokter.scheduler import SchedulingError, generate_schedule, load_doctors, save_schedule
from jadwaldokter.views import read_schedule, render_calendar, render_daily, render_monthly, render_weekly

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_INVALID_NUMBER = "Input tidak valid. Harap masukkan angka."

MenuEntries = dict[int, tuple[str, Callable[[], None]]]


def _ask(prompt: str) -> str:
    return input(prompt).rstrip("\r")


def _parse_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def _ask_int(prompt: str) -> int | None:
    value = _parse_int(_ask(prompt))
    if value is None:
        print(_INVALID_NUMBER)
    return value


def _run_menu(title: str, entries: MenuEntries, back_label: str, back_message: str) -> None:
    while True:
        print(f"\n{title}")
        for key, (label, _) in entries.items():
            print(f"{key}. {label}")
        print(f"0. {back_label}")
        choice = _ask_int("Pilihan: ")
        if choice is None:
            continue
        if choice == 0:
            print(back_message)
            return
        entry = entries.get(choice)
        if entry is None:
            print("Pilihan tidak valid.")
        else:
            entry[1]()


class _Session:
    def __init__(self, data_dir: Path) -> None:
        self.doctor_file = data_dir / "daftar_dokter.csv"
        self.schedule_file = data_dir / "jadwal_dokter.csv"
        self.report_file = data_dir / "laporan_dokter.csv"
        self.registry = DoctorRegistry(self.doctor_file)

    # --- top level ---

    def run(self) -> None:
        try:
            count = self.registry.load_csv(self.doctor_file)
            print(f"Berhasil memuat {count} dokter dari {self.doctor_file}")
        except RegistryError as exc:
            print(exc)
        print("Selamat datang di Sistem Manajemen Jadwal Dokter!")
        actions = {
            1: self.doctor_menu,
            2: self.scheduling_menu,
            3: self.schedule_view_menu,
            4: self.report_menu,
        }
        while True:
            print("\n=== MENU UTAMA ===")
            print("1. Manajemen Dokter")
            print("2. Penjadwalan Otomatis")
            print("3. Lihat Jadwal Dokter")
            print("4. Laporan Kinerja Dokter")
            print("0. Keluar Program")
            choice = _ask_int("Pilihan: ")
            if choice is None:
                continue
            if choice == 0:
                self.shutdown()
                return
            action = actions.get(choice)
            if action is None:
                print("Pilihan tidak valid. Silakan pilih 0-4.")
            else:
                action()

    def shutdown(self) -> None:
        print("Menyimpan data dan membersihkan memori...")
        self._save()
        self.registry.clear()
        print("Terima kasih telah menggunakan program ini.")

    def _save(self) -> None:
        try:
            self.registry.save_csv(self.doctor_file)
            print(f"Data dokter berhasil disimpan ke {self.doctor_file}")
        except RegistryError as exc:
            print(exc)

    # --- doctor management ---

    def doctor_menu(self) -> None:
        _run_menu(
            "=== MENU MANAJEMEN DOKTER ===",
            {
                1: ("Tambah Dokter Baru", self.add_doctor),
                2: ("Hapus Dokter", self.remove_doctor),
                3: ("Cari Dokter", self.search_menu),
                4: ("Tampilkan Semua Dokter", lambda: print(format_all(self.registry.doctors), end="")),
                5: ("Batalkan Aktivitas Terakhir (Undo)", self.undo),
                6: ("Tampilkan Log Aktivitas", self.show_log),
            },
            "Kembali ke Menu Utama",
            "Kembali ke menu utama...",
        )

    def add_doctor(self) -> None:
        prompts = [
            ("Nama: ", "Nama"),
            ("Bidang: ", "Bidang"),
            ("Tingkat (Koass/Residen/Spesialis/Konsulen): ", "Tingkat"),
        ]
        values: list[str] = []
        for prompt, label in prompts:
            value = _ask(prompt)
            if not value:
                print(f"{label} tidak boleh kosong.")
                return
            values.append(value)
        max_shift = _parse_int(_ask("Max shift/minggu: "))
        if max_shift is None:
            print("Input max shift tidak valid.")
            return
        for prompt, label in [
            ("Preferensi Shift (Pagi/Siang/Malam): ", "Preferensi Shift"),
            ("Preferensi Waktu (Campur/Awal Bulan/Akhir Bulan): ", "Preferensi Waktu"),
        ]:
            value = _ask(prompt)
            if not value:
                print(f"{label} tidak boleh kosong.")
                return
            values.append(value)
        nama, bidang, tingkat, pref_shift, pref_waktu = values
        try:
            stored = self.registry.add(
                DoctorRecord(nama, bidang, tingkat, max_shift, pref_shift, pref_waktu)
            )
        except RegistryError as exc:
            print(exc)
            return
        print(f"Dokter {stored.nama} berhasil ditambahkan.")
        print(f"Data dokter berhasil disimpan ke {self.doctor_file}")

    def remove_doctor(self) -> None:
        target = _ask("Masukkan nama dokter yang ingin dihapus: ")
        if not target:
            print("Nama dokter tidak boleh kosong.")
            return
        if not any(doctor.nama == target for doctor in self.registry):
            print("Dokter tidak ditemukan.")
            return
        answer = _ask(f"Apakah Anda yakin ingin menghapus dokter '{target}'? (y/n): ").strip()
        if not answer:
            print("Input tidak valid. Penghapusan dibatalkan.")
            return
        if answer[0].lower() != "y":
            print("Penghapusan dibatalkan.")
            return
        try:
            self.registry.remove(target)
        except RegistryError as exc:
            print(exc)
            return
        print("Dokter berhasil dihapus.")
        print(f"Data dokter berhasil disimpan ke {self.doctor_file}")

    def search_menu(self) -> None:
        def by(field: str, label: str) -> Callable[[], None]:
            return lambda: self.search(field, label)

        _run_menu(
            "=== MENU CARI DOKTER ===",
            {
                1: ("Cari berdasarkan nama", by("nama", "nama")),
                2: ("Cari berdasarkan bidang", by("bidang", "bidang")),
                3: ("Cari berdasarkan tingkat", by("tingkat", "tingkat")),
            },
            "Kembali ke menu utama",
            "Kembali ke menu manajemen dokter...",
        )

    def search(self, field: str, label: str) -> None:
        keyword = _ask(f"Masukkan {label} dokter yang ingin dicari: ")
        try:
            results = self.registry.search(field, keyword)
        except RegistryError:
            print("Keyword tidak boleh kosong.")
            return
        print(format_search_results(results), end="")

    def undo(self) -> None:
        try:
            print(self.registry.undo())
        except RegistryError as exc:
            print(exc)
            return
        print(f"Data dokter berhasil disimpan ke {self.doctor_file}")

    def show_log(self) -> None:
        lines = self.registry.log_lines()
        if not lines:
            print("Belum ada aktivitas.")
            return
        print("\n=== LOG AKTIVITAS (terbaru di atas) ===")
        for line in lines:
            print(line)

    # --- scheduling ---

    def scheduling_menu(self) -> None:
        print("\n=== MENU PENJADWALAN OTOMATIS ===")
        print(f"Memuat data dokter dari {self.doctor_file}...")
        try:
            doctors = load_doctors(self.doctor_file)
        except SchedulingError:
            print(
                "Gagal memuat data dokter atau file kosong. "
                f"Pastikan {self.doctor_file} ada dan berisi data."
            )
            return
        print(f"Berhasil memuat {len(doctors)} dokter.")
        print("Menghasilkan jadwal bulanan...")
        slots = generate_schedule(doctors)
        print("Jadwal berhasil dibuat.")
        print(f"Menyimpan jadwal ke {self.schedule_file}...")
        try:
            save_schedule(self.schedule_file, doctors, slots)
        except SchedulingError as exc:
            print(exc)
            return
        print("Penjadwalan selesai. Jadwal baru telah disimpan.")

    # --- schedule views ---

    def schedule_view_menu(self) -> None:
        try:
            rows = read_schedule(self.schedule_file)
        except OSError:
            print(
                f"Error: Tidak dapat membuka file jadwal {self.schedule_file}. "
                "Harap lakukan penjadwalan terlebih dahulu."
            )
            return

        def daily() -> None:
            print(render_calendar(), end="")
            while True:
                day = _parse_int(_ask("\nPilih tanggal (1-30): "))
                if day is not None and 1 <= day <= 30:
                    break
                print("Tanggal tidak Valid")
            print(render_daily(rows, day), end="")

        def weekly() -> None:
            print(render_calendar())
            while True:
                week = _parse_int(_ask("Pilih Minggu (1/2/3/4/5): "))
                if week is not None and 1 <= week <= 5:
                    break
                print("Input tidak Valid")
            print(render_weekly(rows, week), end="")

        _run_menu(
            "=== MENU LIHAT JADWAL ===",
            {
                1: ("Tampilkan Jadwal Harian", daily),
                2: ("Tampilkan Jadwal Mingguan", weekly),
                3: ("Tampilkan Jadwal Bulanan", lambda: print(render_monthly(rows), end="")),
            },
            "Kembali ke Menu Utama",
            "Kembali ke menu utama...",
        )

    # --- reports ---

    def report_menu(self) -> None:
        try:
            entries = load_shift_entries(self.schedule_file)
            prefs = load_doctor_prefs(self.doctor_file)
        except ReportError as exc:
            print(exc)
            return
        if not entries or not prefs:
            print(
                "Tidak ada data yang cukup untuk membuat laporan. "
                "Pastikan file jadwal dan dokter terisi."
            )
            return
        print("\n=== MENU LAPORAN KINERJA DOKTER --->")
        print("Memproses data untuk laporan...")
        try:
            reports = build_report(entries, prefs)
        except ReportError as exc:
            print(exc)
            return
        print("Data selesai diproses.")
        print(f"Menyimpan laporan ke {self.report_file}...")
        try:
            write_report(self.report_file, reports)
        except ReportError as exc:
            print(exc)
            return
        print(f"Laporan berhasil disimpan ke {self.report_file}")
        print("Laporan kinerja dokter telah dibuat.")

        def total_shift() -> None:
            name = _ask("Masukkan nama dokter: ")
            self._report_lookup(find_total_shift, name, "Total shift untuk")

        def violations() -> None:
            for message in schedule_violations(entries, prefs):
                print(message)

        def all_violations() -> None:
            try:
                counts = violation_counts(self.report_file)
            except ReportError as exc:
                print(exc)
                return
            for name, count in counts:
                print(f"{name} memiliki total pelanggaran: {count}")

        def doctor_violations() -> None:
            name = _ask("Masukkan nama dokter: ")
            self._report_lookup(find_violation_count, name, "Total pelanggaran untuk")

        _run_menu(
            "=== SUBMENU LAPORAN KINERJA ==>\n",
            {
                1: ("Lihat Total Shift Dokter", total_shift),
                2: ("Lihat Pelanggaran Jadwal", violations),
                3: ("Lihat Jumlah Pelanggaran Semua Dokter", all_violations),
                4: ("Lihat Pelanggaran Dokter Tertentu", doctor_violations),
            },
            "Back",
            "Kembali ke menu utama...",
        )

    def _report_lookup(self, finder, name: str, label: str) -> None:
        try:
            value = finder(self.report_file, name)
        except ReportError as exc:
            print(exc)
            return
        if value is None:
            print(f"Dokter dengan nama '{name}' tidak ditemukan.")
        else:
            print(f"{label} {name}: {value}")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jadwaldokter", description="Sistem Manajemen Jadwal Dokter"
    )
    parser.add_argument(
        "--data-dir", default="data", help="directory holding the CSV files"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the interactive menu; input ends at option 0 or end of input."""
    args = _parse_args(argv)
    session = _Session(Path(args.data_dir))
    try:
        session.run()
    except EOFError:
        print()
        session.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())