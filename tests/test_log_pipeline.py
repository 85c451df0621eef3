from datetime import datetime
from zoneinfo import ZoneInfo

from conftest import make_transaksi

from absenofc.services.log_pipeline import (
    normalize_event,
    normalize_events,
    read_entries,
    deduplicate_events,
    pivot_events,
    summarize,
    compute_work_duration,
)


def _events(*raws):
    return normalize_events(list(raws))


class TestNormalizeEvent:
    def test_shapes_nested_record(self):
        event = normalize_event(make_transaksi("t1", "123", "2024-05-01T08:00:00", aksi="MASUK", nama="Budi"))

        assert event.id_transaksi == "t1"
        assert event.nik == "123"
        assert event.nama == "Budi"
        assert event.kantor == "Kantor Pusat"
        assert event.aksi == "MASUK"
        assert event.status == "Valid"
        assert event.waktu == datetime(2024, 5, 1, 8, 0, 0)
        assert event.fotobukti == "/uploads/t1.jpg"

    def test_drops_missing_nik(self):
        raw = make_transaksi("t1", "", "2024-05-01T08:00:00")
        assert normalize_event(raw) is None

        raw = make_transaksi("t2", "123", "2024-05-01T08:00:00")
        raw["user"] = None
        assert normalize_event(raw) is None

    def test_drops_unparseable_timestamp(self):
        assert normalize_event(make_transaksi("t1", "123", "kemarin sore")) is None

        raw = make_transaksi("t2", "123", "2024-05-01T08:00:00")
        del raw["waktutransaksi"]
        assert normalize_event(raw) is None

    def test_batch_keeps_going_past_bad_records(self):
        events = normalize_events([
            make_transaksi("t1", "123", "bukan tanggal"),
            make_transaksi("t2", "123", "2024-05-01T08:00:00"),
            make_transaksi("t3", None, "2024-05-01T08:00:00"),
        ])
        assert [e.id_transaksi for e in events] == ["t2"]

    def test_missing_aksi_is_kept_as_empty(self):
        raw = make_transaksi("t1", "123", "2024-05-01T08:00:00")
        raw["aksi"] = None
        event = normalize_event(raw)
        assert event is not None
        assert event.aksi == ""

    def test_numeric_nik_becomes_string(self):
        event = normalize_event(make_transaksi("t1", 3201012345, "2024-05-01T08:00:00"))
        assert event.nik == "3201012345"

    def test_numeric_koordinat_is_kept(self):
        raw = make_transaksi("t1", "123", "2024-05-01T08:00:00")
        raw["koordinat"] = -6.2
        event = normalize_event(raw)
        assert event is not None
        assert event.koordinat == -6.2

    def test_list_koordinat_is_kept(self):
        raw = make_transaksi("t1", "123", "2024-05-01T08:00:00")
        raw["koordinat"] = [-6.2, 106.8]
        event = normalize_event(raw)
        assert event is not None
        assert event.koordinat == [-6.2, 106.8]

    def test_numeric_ids_become_strings(self):
        raw = make_transaksi("t1", "123", "2024-05-01T08:00:00")
        raw["idtransaksi"] = 77
        raw["status"] = {"idstatus": 2, "namastatus": "Valid"}
        raw["user"]["kantor"] = {"idkantor": 1, "namakantor": "Kantor Pusat"}
        event = normalize_event(raw)
        assert event is not None
        assert event.id_transaksi == "77"
        assert event.status == "Valid"
        assert event.kantor == "Kantor Pusat"

    def test_malformed_nested_objects_are_ignored(self):
        raw = make_transaksi("t1", "123", "2024-05-01T08:00:00")
        raw["aksi"] = "Masuk"
        raw["status"] = ["Valid"]
        raw["user"]["kantor"] = 1
        event = normalize_event(raw)
        assert event is not None
        assert (event.aksi, event.status, event.kantor) == ("", "", "")

    def test_aware_timestamp_moves_to_export_timezone(self):
        event = normalize_event(
            make_transaksi("t1", "123", "2024-04-30T23:30:00Z"),
            tz=ZoneInfo("Asia/Jakarta"),
        )
        assert event.waktu == datetime(2024, 5, 1, 6, 30, 0)
        assert event.waktu.tzinfo is None

    def test_short_offset_from_backend(self):
        event = normalize_event(
            make_transaksi("t1", "123", "2024-05-01 08:00:00+07"),
            tz=ZoneInfo("Asia/Jakarta"),
        )
        assert event.waktu == datetime(2024, 5, 1, 8, 0, 0)


class TestReadEntries:
    def test_keeps_records_the_export_drops(self):
        entries = read_entries([
            make_transaksi("t1", "123", "bukan tanggal"),
            make_transaksi("t2", None, "2024-05-01T08:00:00"),
            make_transaksi("t3", "123", "2024-05-01T08:00:00"),
        ])
        assert [e.id_transaksi for e in entries] == ["t1", "t2", "t3"]
        assert entries[0].waktu is None
        assert entries[1].nik == ""
        assert entries[2].waktu == datetime(2024, 5, 1, 8, 0, 0)

    def test_skips_non_object_records(self):
        entries = read_entries(["oops", None, make_transaksi("t1", "123", "2024-05-01T08:00:00")])
        assert [e.id_transaksi for e in entries] == ["t1"]


class TestDeduplicate:
    def test_keeps_earliest_per_user_day_aksi(self):
        events = _events(
            make_transaksi("t1", "123", "2024-05-01T09:10:00"),
            make_transaksi("t2", "123", "2024-05-01T08:55:00"),
            make_transaksi("t3", "123", "2024-05-01T09:30:00"),
        )
        unique = deduplicate_events(events)
        assert [e.id_transaksi for e in unique] == ["t2"]

    def test_tie_keeps_first_seen(self):
        events = _events(
            make_transaksi("t1", "123", "2024-05-01T08:00:00"),
            make_transaksi("t2", "123", "2024-05-01T08:00:00"),
        )
        assert [e.id_transaksi for e in deduplicate_events(events)] == ["t1"]

    def test_different_aksi_day_or_user_are_separate(self):
        events = _events(
            make_transaksi("t1", "123", "2024-05-01T08:00:00", aksi="Masuk"),
            make_transaksi("t2", "123", "2024-05-01T17:00:00", aksi="Pulang"),
            make_transaksi("t3", "123", "2024-05-02T08:00:00", aksi="Masuk"),
            make_transaksi("t4", "456", "2024-05-01T08:00:00", aksi="Masuk"),
        )
        assert len(deduplicate_events(events)) == 4

    def test_aksi_case_is_part_of_the_key(self):
        events = _events(
            make_transaksi("t1", "123", "2024-05-01T08:00:00", aksi="Masuk"),
            make_transaksi("t2", "123", "2024-05-01T07:00:00", aksi="masuk"),
        )
        assert len(deduplicate_events(events)) == 2


class TestComputeWorkDuration:
    def test_full_day(self):
        assert compute_work_duration("08:00:00", "17:00:00") == "09:00"

    def test_seconds_taken_from_checkout(self):
        # check-in seconds are ignored: 08:00:45 counts as 08:00:10
        assert compute_work_duration("08:00:45", "17:00:10") == "09:00"
        assert compute_work_duration("08:15:59", "16:45:00") == "08:30"

    def test_checkout_before_checkin_is_not_clamped(self):
        assert compute_work_duration("17:00:00", "16:30:00") == "-1:-30"
        assert compute_work_duration("09:00:00", "08:00:00") == "-1:00"

    def test_missing_side(self):
        assert compute_work_duration("08:00:00", "") == ""
        assert compute_work_duration("", "17:00:00") == ""

    def test_whole_day_span(self):
        assert compute_work_duration("00:00:00", "23:59:59") == "23:59"


class TestPivot:
    def test_earliest_checkin_wins_regardless_of_order(self):
        summaries = summarize(_events(
            make_transaksi("t1", "123", "2024-05-01T09:10:00", aksi="masuk"),
            make_transaksi("t2", "123", "2024-05-01T08:55:00", aksi="masuk"),
        ))
        assert len(summaries) == 1
        assert summaries[0].jam_masuk == "08:55:00"

    def test_one_row_per_user_day(self, transaksis):
        summaries = summarize(normalize_events(transaksis))

        assert [(s.nik, s.tanggal) for s in summaries] == [
            ("123", "01/05/2024"),
            ("456", "01/05/2024"),
            ("123", "02/05/2024"),
            ("789", "02/05/2024"),
        ]
        budi = summaries[0]
        assert budi.nama == "Budi S."
        assert budi.kantor == "Kantor Pusat"
        assert budi.jam_masuk == "08:55:00"
        assert budi.jam_pulang == "17:00:00"
        assert budi.jam_izin == ""
        assert budi.waktu_kerja == "08:05"

        siti = summaries[1]
        assert siti.jam_izin == "10:00:00"
        assert siti.jam_masuk == ""
        assert siti.waktu_kerja == ""

    def test_unrecognized_aksi_opens_row_without_slots(self):
        summaries = summarize(_events(
            make_transaksi("t1", "123", "2024-05-01T12:00:00", aksi="Istirahat"),
        ))
        assert len(summaries) == 1
        s = summaries[0]
        assert (s.jam_masuk, s.jam_pulang, s.jam_izin, s.waktu_kerja) == ("", "", "", "")

    def test_case_variants_resolve_to_earliest(self):
        summaries = summarize(_events(
            make_transaksi("t1", "123", "2024-05-01T08:30:00", aksi="masuk"),
            make_transaksi("t2", "123", "2024-05-01T08:10:00", aksi="MASUK"),
        ))
        assert summaries[0].jam_masuk == "08:10:00"

    def test_custom_date_format(self):
        summaries = pivot_events(
            _events(make_transaksi("t1", "123", "2024-05-01T08:00:00")),
            date_format="%Y-%m-%d",
        )
        assert summaries[0].tanggal == "2024-05-01"

    def test_empty_input(self):
        assert summarize([]) == []
