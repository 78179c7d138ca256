import pytest

from jadwaldokter import scheduler
from jadwaldokter.scheduler import (
    Doctor,
    PreferensiWaktu,
    SchedulingError,
    ShiftType,
    Tingkat,
    calculate_score,
    generate_schedule,
    load_doctors,
    parse_shift,
    parse_tingkat,
    parse_waktu,
    save_schedule,
    schedule_rows,
)

HEADER = "nama,bidang,tingkat,max_shift_per_minggu,preferensi_shift,preferensi_waktu\n"


def _write(tmp_path, body):
    path = tmp_path / "dokter.csv"
    path.write_text(HEADER + body, encoding="utf-8")
    return path


def _doctor(name="dr A", shift=ShiftType.PAGI, waktu=PreferensiWaktu.CAMPUR,
            tingkat=Tingkat.KOASS, max_shifts=5):
    return Doctor(name, "Umum", tingkat, max_shifts, shift, waktu)


def test_parse_shift():
    assert parse_shift("Pagi") is ShiftType.PAGI
    assert parse_shift("Shift Malam") is ShiftType.MALAM
    assert parse_shift("Siang") is ShiftType.SIANG
    assert parse_shift("lainnya") is ShiftType.PAGI
    assert parse_shift(None) is ShiftType.PAGI


def test_parse_tingkat():
    assert parse_tingkat("Konsulen") is Tingkat.KONSULEN
    assert parse_tingkat("Residen") is Tingkat.RESIDEN
    assert parse_tingkat("Spesialis") is Tingkat.SPESIALIS
    assert parse_tingkat("???") is Tingkat.KOASS


def test_parse_waktu():
    assert parse_waktu("Awal Bulan") is PreferensiWaktu.AWAL_BULAN
    assert parse_waktu("AkhirBulan") is PreferensiWaktu.AKHIR_BULAN
    assert parse_waktu("Campur") is PreferensiWaktu.CAMPUR
    assert parse_waktu("lain") is PreferensiWaktu.CAMPUR


def test_load_doctors_parses_and_skips_invalid(tmp_path):
    path = _write(
        tmp_path,
        "dr A,Bedah,Spesialis,3,Malam,Awal Bulan\r\n"
        "dr B,Anak,Residen,0,Pagi,Campur\n"
        "dr C,Anak\n"
        ",dr D,,Saraf,Konsulen,2,Siang,Akhir Bulan\n",
    )
    doctors = load_doctors(path)
    assert [d.name for d in doctors] == ["dr A", "dr D"]
    first = doctors[0]
    assert first.bidang == "Bedah"
    assert first.tingkat is Tingkat.SPESIALIS
    assert first.max_shifts_per_week == 3
    assert first.preferred_shift is ShiftType.MALAM
    assert first.preferred_time is PreferensiWaktu.AWAL_BULAN
    assert doctors[1].bidang == "Saraf"
    assert doctors[1].preferred_time is PreferensiWaktu.AKHIR_BULAN


def test_load_doctors_caps_count(tmp_path):
    body = "".join(f"dr {n},Umum,Koass,2,Pagi,Campur\n" for n in range(60))
    doctors = load_doctors(_write(tmp_path, body))
    assert len(doctors) == scheduler.MAX_DOCTORS


def test_load_doctors_missing_file(tmp_path):
    with pytest.raises(SchedulingError):
        load_doctors(tmp_path / "none.csv")


def test_load_doctors_header_only(tmp_path):
    with pytest.raises(SchedulingError):
        load_doctors(_write(tmp_path, ""))


def test_load_doctors_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SchedulingError):
        load_doctors(path)


def test_score_prefers_preferred_shift():
    doctor = _doctor(shift=ShiftType.SIANG)
    assert calculate_score(doctor, 3, ShiftType.SIANG) > calculate_score(doctor, 3, ShiftType.PAGI)


def test_score_rises_with_seniority():
    junior = _doctor(tingkat=Tingkat.KOASS)
    senior = _doctor(tingkat=Tingkat.KONSULEN)
    assert calculate_score(senior, 0, ShiftType.PAGI) > calculate_score(junior, 0, ShiftType.PAGI)


def test_score_falls_with_workload():
    rested = _doctor()
    busy = _doctor()
    busy.total_shifts_assigned = 10
    assert calculate_score(rested, 22, ShiftType.PAGI) > calculate_score(busy, 22, ShiftType.PAGI)


def test_score_time_preference():
    early = _doctor(waktu=PreferensiWaktu.AWAL_BULAN)
    late = _doctor(waktu=PreferensiWaktu.AKHIR_BULAN)
    assert calculate_score(early, 0, ShiftType.PAGI) > calculate_score(early, 20, ShiftType.PAGI)
    assert calculate_score(late, 20, ShiftType.PAGI) > calculate_score(late, 0, ShiftType.PAGI)


def test_score_overwork_penalty():
    doctor = _doctor(max_shifts=1)
    fresh = calculate_score(doctor, 0, ShiftType.PAGI)
    doctor.weekly_shifts[0] = 3
    assert calculate_score(doctor, 0, ShiftType.PAGI) < fresh


def test_generate_schedule_fills_every_slot():
    doctors = [_doctor("dr A"), _doctor("dr B", ShiftType.MALAM), _doctor("dr C", ShiftType.SIANG)]
    slots = generate_schedule(doctors)
    assert len(slots) == scheduler.DAYS_IN_MONTH * scheduler.SHIFTS_PER_DAY
    for slot in slots:
        assert len(slot.doctor_ids) == scheduler.DOCTORS_PER_SHIFT
        assert len(set(slot.doctor_ids)) == len(slot.doctor_ids)
    assert sum(d.total_shifts_assigned for d in doctors) == sum(len(s.doctor_ids) for s in slots)
    for doctor in doctors:
        assert sum(doctor.weekly_shifts) == doctor.total_shifts_assigned


def test_generate_schedule_order():
    slots = generate_schedule([_doctor()])
    assert [(s.day, s.shift) for s in slots[:4]] == [
        (0, ShiftType.PAGI), (0, ShiftType.SIANG), (0, ShiftType.MALAM), (1, ShiftType.PAGI)
    ]
    assert all(len(s.doctor_ids) == 1 for s in slots)


def test_generate_schedule_follows_preference():
    doctors = [_doctor("dr A", ShiftType.PAGI), _doctor("dr B", ShiftType.MALAM)]
    slots = generate_schedule(doctors, 1)
    assert slots[0].doctor_ids == [0]
    assert slots[2].doctor_ids == [1]


def test_generate_schedule_without_doctors():
    slots = generate_schedule([])
    assert all(slot.doctor_ids == [] for slot in slots)


@pytest.mark.parametrize("count", [0, 3])
def test_generate_schedule_rejects_bad_count(count):
    with pytest.raises(ValueError):
        generate_schedule([_doctor()], count)


def test_schedule_rows_day_names():
    doctors = [_doctor()]
    rows = list(schedule_rows(doctors, generate_schedule(doctors, 1)))
    by_date = {row[0]: row[1] for row in rows}
    assert by_date[1] == "Senin"
    assert by_date[7] == "Minggu"
    assert by_date[8] == "Senin"
    assert rows[0][2] == "Pagi"
    assert rows[0][5] == "Koass"


def test_save_schedule_round_trip(tmp_path):
    doctors = [_doctor("dr A"), _doctor("dr B", ShiftType.MALAM)]
    slots = generate_schedule(doctors)
    path = tmp_path / "jadwal.csv"
    save_schedule(path, doctors, slots)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == scheduler.SCHEDULE_HEADER
    assert len(lines) - 1 == sum(len(s.doctor_ids) for s in slots)
    assert lines[1].startswith("1,Senin,Pagi,")
    assert [",".join(map(str, r)) for r in schedule_rows(doctors, slots)] == lines[1:]