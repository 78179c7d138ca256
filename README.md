# jadwaldokter

Builds a month of hospital doctor shifts from a roster kept in CSV files.

## What it does

- **Roster management.**
  - Add and remove doctors, with undo and an activity log.
  - Search by name (`nama`), field (`bidang`) or level (`tingkat`), case-insensitively.
- **Automatic scheduling.**
  - A greedy scheduler fills a 30-day month that starts on a Monday.
  - Each day has three shifts (Pagi, Siang, Malam), with two doctors per shift by default.
  - Each doctor is scored on their preferred shift, preferred part of the month, weekly shift limit, shifts already given and level.
- **Schedule views.** A month calendar, plus daily, weekly and monthly text tables of a saved schedule.
- **Performance report.** For each doctor, the report gives:
  - total shifts
  - shifts per week
  - shifts per shift type
  - the number of times their preferences were broken

## Installation

```
pip install .
```

## Data files

By default the files live in `data/` under the current directory.

`daftar_dokter.csv` is the doctor roster:

```
nama,bidang,tingkat,max_shift_per_minggu,preferensi_shift,preferensi_waktu
dr. Ani,Anak,Residen,5,Pagi,Awal
dr. Budi,Bedah,Spesialis,4,Malam,Campur
```

- *Tingkat* is one of `Koass`, `Residen`, `Spesialis` or `Konsulen`.
- The preferred shift is `Pagi`, `Siang` or `Malam`.
- The preferred time is one of:
  - `Awal` (or `AwalBulan`) for early in the month
  - `Akhir` (or `AkhirBulan`) for late in the month
  - `Campur` for any day

  The report counts days 1–15 as early and 16–31 as late. Any other preferred time counts as any day.

`jadwal_dokter.csv` is the generated schedule. Its columns are `Tanggal,Hari,Shift,Nama_Dokter,Bidang,Tingkat`.

`laporan_dokter.csv` is the performance report. Its columns are:

- name, field and level
- total shifts
- weekly limit
- preferred shift and preferred time
- violations
- five weekly counts
- counts for Pagi, Siang and Malam

## Command line

```
jadwaldokter
jadwaldokter --data-dir path/to/data
```

This opens an interactive text menu with four parts:

1. doctor management
2. automatic scheduling
3. schedule viewing
4. performance reports

The roster is loaded at start-up. A missing roster file is created holding just the header. The roster is saved after every add, remove or undo, and again on exit. The program exits at option 0 or at end of input.

## Library use

```python
from jadwaldokter.scheduler import load_doctors, generate_schedule, save_schedule
from jadwaldokter.report import (
    load_shift_entries, load_doctor_prefs, build_report, write_report,
)

doctors = load_doctors("data/daftar_dokter.csv")
slots = generate_schedule(doctors, 2)
save_schedule("data/jadwal_dokter.csv", doctors, slots)

entries = load_shift_entries("data/jadwal_dokter.csv")
prefs = load_doctor_prefs("data/daftar_dokter.csv")
write_report("data/laporan_dokter.csv", build_report(entries, prefs))
```

### `jadwaldokter.scheduler`

- `load_doctors` reads up to 50 valid doctors.
- `generate_schedule` returns a list of `ShiftSlot` and updates each `Doctor`'s counters.
- `schedule_rows` yields the rows that `save_schedule` writes.
- Errors raise `SchedulingError`.

### `jadwaldokter.report`

- `build_report` returns one `DoctorReport` per doctor.
- `schedule_violations` returns one message per broken preference.
- `find_total_shift`, `find_violation_count` and `violation_counts` read a saved report.
- Errors raise `ReportError`.

### `jadwaldokter.doctors`

`DoctorRegistry` keeps `DoctorRecord`s, newest first:

- `add`, `remove` and `undo` change the roster. If the registry was given a path, it saves after each change.
- `search` finds doctors by field.
- `log_lines` returns the activity log.
- `load_csv`, `save_csv` and `clear` handle the roster file and reset the registry.
- `format_all` and `format_search_results` render doctors as text.
- Errors raise `RegistryError`.

### `jadwaldokter.views`

- `read_schedule` returns `ScheduleRow`s.
- `render_calendar`, `render_daily`, `render_weekly` and `render_monthly` return text tables.

## What it does not do

- There is no graphical window. The only interface is the text menu.
- Months are always 30 days and start on a Monday. Real calendar dates are not used.

## Running the tests

```
pip install .[test]
pytest
```