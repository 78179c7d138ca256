import pytest

from jadwaldokter import report
from jadwaldokter.report import (
    DoctorPref,
    ReportError,
    ShiftEntry,
    build_report,
    find_total_shift,
    find_violation_count,
    load_doctor_prefs,
    load_shift_entries,
    schedule_violations,
    shift_index,
    time_matches,
    violation_counts,
    write_report,
)

DAY_NAMES = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")


def _prefs():
    return [
        DoctorPref("dr A", "Bedah", "Spesialis", 2, "Pagi", "Awal"),
        DoctorPref("dr B", "Anak", "Residen", 5, "Malam", "Campur"),
    ]


def _entries():
    entries = []
    for day in range(1, 15):
        hari = DAY_NAMES[(day - 1) % 7]
        entries.append(ShiftEntry(day, hari, "Pagi" if day % 2 else "Siang", "dr A", "Bedah", "Spesialis"))
        entries.append(ShiftEntry(day, hari, "Malam", "dr B", "Anak", "Residen"))
    return entries


def test_shift_index():
    assert [shift_index(s) for s in report.SHIFT_NAMES] == [0, 1, 2]
    assert shift_index("Sore") is None


@pytest.mark.parametrize(
    "pref, day, expected",
    [
        ("Campur", 30, True),
        ("Awal", 15, True),
        ("AwalBulan", 16, False),
        ("AkhirBulan", 16, True),
        ("Akhir", 1, False),
        ("lain", 1, True),
    ],
)
def test_time_matches(pref, day, expected):
    assert time_matches(pref, day) is expected


def test_load_shift_entries(tmp_path):
    path = tmp_path / "jadwal.csv"
    path.write_text(
        "Tanggal,Hari,Shift,Nama_Dokter,Bidang,Tingkat\n"
        "3,Rabu,Malam,dr B,Anak,Residen\n"
        "\n"
        "5,Jumat",
        encoding="utf-8",
    )
    entries = load_shift_entries(path)
    assert entries == [
        ShiftEntry(3, "Rabu", "Malam", "dr B", "Anak", "Residen"),
        ShiftEntry(5, "Jumat"),
    ]


def test_load_doctor_prefs(tmp_path):
    path = tmp_path / "dokter.csv"
    path.write_text(
        "nama,bidang,tingkat,max_shift_per_minggu,preferensi_shift,preferensi_waktu\n"
        "dr A,Bedah,Spesialis,3,Pagi,Awal Bulan\n",
        encoding="utf-8",
    )
    assert load_doctor_prefs(path) == [DoctorPref("dr A", "Bedah", "Spesialis", 3, "Pagi", "Awal")]


def test_missing_files_raise(tmp_path):
    missing = tmp_path / "none.csv"
    with pytest.raises(ReportError):
        load_shift_entries(missing)
    with pytest.raises(ReportError):
        load_doctor_prefs(missing)
    with pytest.raises(ReportError):
        find_total_shift(missing, "dr A")


def test_build_report_invariants():
    entries = _entries()
    reports = build_report(entries, _prefs())
    assert [r.pref.nama for r in reports] == ["dr A", "dr B"]
    for r in reports:
        assert sum(r.weekly) == r.total_shift
        assert sum(r.per_type) == r.total_shift
    assert sum(r.total_shift for r in reports) == len(entries)
    assert sum(r.pelanggaran for r in reports) == len(schedule_violations(entries, _prefs()))


def test_build_report_no_violation():
    entry = ShiftEntry(1, "Senin", "Pagi", "dr A")
    (first, second) = build_report([entry], _prefs())
    assert first.pelanggaran == 0
    assert first.per_type[0] == first.total_shift == 1
    assert second.total_shift == 0
    assert schedule_violations([entry], _prefs()) == []


def test_wrong_shift_is_one_violation():
    entry = ShiftEntry(1, "Senin", "Siang", "dr A")
    assert build_report([entry], _prefs())[0].pelanggaran == 1
    assert schedule_violations([entry], _prefs()) == [
        "[1] dr A - Shift tidak sesuai preferensi (jadwal: Siang, preferensi: Pagi)"
    ]


def test_time_and_weekly_messages():
    prefs = [DoctorPref("dr A", "Bedah", "Spesialis", 1, "Pagi", "Awal")]
    entries = [
        ShiftEntry(15, "Senin", "Pagi", "dr A"),
        ShiftEntry(16, "Selasa", "Pagi", "dr A"),
    ]
    assert schedule_violations(entries, prefs) == [
        "[16] dr A - Waktu tidak sesuai preferensi (jadwal tanggal: 16, preferensi: Awal bulan)",
        "[16] dr A - Melebihi shift mingguan maksimum (1 per minggu)",
    ]


def test_unknown_doctor_is_ignored():
    reports = build_report([ShiftEntry(1, "Senin", "Pagi", "dr Z")], _prefs())
    assert all(r.total_shift == 0 and r.pelanggaran == 0 for r in reports)
    assert schedule_violations([ShiftEntry(1, "Senin", "Pagi", "dr Z")], _prefs()) == []


def test_day_outside_month_raises():
    with pytest.raises(ReportError):
        build_report([ShiftEntry(40, "Senin", "Pagi", "dr A")], _prefs())


def test_write_and_query_report(tmp_path):
    reports = build_report(_entries(), _prefs())
    path = tmp_path / "laporan.csv"
    write_report(path, reports)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == report.REPORT_HEADER
    assert len(lines) == len(reports) + 1
    for r in reports:
        assert find_total_shift(path, r.pref.nama) == str(r.total_shift)
        assert find_violation_count(path, r.pref.nama) == str(r.pelanggaran)
    assert violation_counts(path) == [(r.pref.nama, r.pelanggaran) for r in reports]
    assert find_total_shift(path, "dr Z") is None
    assert find_violation_count(path, "dr Z") is None


def test_violation_counts_skips_short_rows(tmp_path):
    path = tmp_path / "laporan.csv"
    path.write_text(report.REPORT_HEADER + "\ndr A,Bedah\n\n", encoding="utf-8")
    assert violation_counts(path) == []
    assert find_violation_count(path, "dr A") is None