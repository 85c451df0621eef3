"""
Log Pipeline - normalize, deduplicate and pivot attendance transactions

Raw transactions flow through three steps:

1. normalize_events: validate against the Transaksi contract, drop records
   without NIK or a parseable waktutransaksi, move aware timestamps into the
   export timezone.
2. deduplicate_events: keep the earliest event per (nik, day, aksi).
3. pivot_events: fold the survivors into one DaySummary per (nik, day).

Listings use read_entries instead, which keeps every transaction.
"""
import logging
from datetime import date, datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from absenofc.schemas.transaksi import Transaksi, LogEntry, LogEvent
from absenofc.schemas.export import DaySummary

logger = logging.getLogger(__name__)

AKSI_MASUK = "masuk"
AKSI_PULANG = "pulang"
AKSI_IZIN = "izin"

TIME_FORMAT = "%H:%M:%S"
DEFAULT_DATE_FORMAT = "%d/%m/%Y"

# aksi (lowercased) -> DaySummary slot
AKSI_SLOTS = {
    AKSI_MASUK: "jam_masuk",
    AKSI_PULANG: "jam_pulang",
    AKSI_IZIN: "jam_izin",
}


def parse_transaksi(raw: Any) -> Optional[Transaksi]:
    """Validate one raw record; only a non-object record fails"""
    try:
        return Transaksi.model_validate(raw)
    except ValidationError as e:
        logger.debug("Skipping malformed transaksi record: %s", e.errors()[0]["msg"])
        return None


def local_time(waktu: Optional[datetime], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Aware timestamps become naive wall-clock time in tz; naive ones are kept"""
    if waktu is None or waktu.tzinfo is None:
        return waktu
    return waktu.astimezone(tz).replace(tzinfo=None)


def _entry_fields(transaksi: Transaksi, tz: Optional[tzinfo]) -> Dict[str, Any]:
    user = transaksi.user
    kantor = user.kantor if user else None
    return {
        "id_transaksi": transaksi.idtransaksi,
        "nik": (user.nik if user else None) or "",
        "nama": (user.nama if user else None) or "",
        "kantor": (kantor.namakantor if kantor else None) or "",
        "aksi": (transaksi.aksi.namaaksi if transaksi.aksi else None) or "",
        "status": (transaksi.status.namastatus if transaksi.status else None) or "",
        "waktu": local_time(transaksi.waktutransaksi, tz),
        "keterangan": transaksi.keterangan,
        "koordinat": transaksi.koordinat,
        "fotobukti": transaksi.fotobukti,
    }


def read_entries(raws: Iterable[Any], tz: Optional[tzinfo] = None) -> List[LogEntry]:
    """Shape every transaction for listing, including those without NIK or timestamp"""
    entries = []
    for raw in raws:
        transaksi = parse_transaksi(raw)
        if transaksi is not None:
            entries.append(LogEntry(**_entry_fields(transaksi, tz)))
    return entries


def normalize_event(raw: Dict[str, Any], tz: Optional[tzinfo] = None) -> Optional[LogEvent]:
    """
    Shape one raw transaction into a LogEvent

    Returns:
        LogEvent, or None when the record has no NIK or no parseable timestamp
    """
    transaksi = parse_transaksi(raw)
    if transaksi is None:
        return None

    fields = _entry_fields(transaksi, tz)
    if not fields["nik"]:
        logger.debug("Dropping transaksi %s: missing nik", transaksi.idtransaksi)
        return None
    if fields["waktu"] is None:
        logger.debug("Dropping transaksi %s: missing or unparseable waktutransaksi", transaksi.idtransaksi)
        return None

    return LogEvent(**fields)


def normalize_events(raws: Iterable[Dict[str, Any]], tz: Optional[tzinfo] = None) -> List[LogEvent]:
    events = []
    dropped = 0
    for raw in raws:
        event = normalize_event(raw, tz)
        if event is None:
            dropped += 1
            continue
        events.append(event)

    if dropped:
        logger.info("Normalized %d transaksi, dropped %d malformed", len(events), dropped)
    return events


def calendar_day(event: LogEvent) -> date:
    return event.waktu.date()


def deduplicate_events(events: Iterable[LogEvent]) -> List[LogEvent]:
    """Keep the earliest event per (nik, day, aksi); ties keep the first seen"""
    unique: Dict[str, LogEvent] = {}
    for event in events:
        key = f"{event.nik}-{calendar_day(event).isoformat()}-{event.aksi}"
        stored = unique.get(key)
        # strict comparison: an equal timestamp never replaces
        if stored is None or event.waktu < stored.waktu:
            unique[key] = event
    return list(unique.values())


def compute_work_duration(jam_masuk: str, jam_pulang: str) -> str:
    """
    Elapsed time between check-in and check-out as HH:MM

    The start instant takes its seconds from the check-out time, so only
    hours and minutes of the check-in matter. Negative spans are not
    clamped: the remainder keeps the sign of the minute count, e.g. a
    check-out 30 minutes before check-in yields "-1:-30".
    """
    if not jam_masuk or not jam_pulang:
        return ""

    in_h, in_m, _ = (int(part) for part in jam_masuk.split(":"))
    out_h, out_m, out_s = (int(part) for part in jam_pulang.split(":"))

    start = in_h * 3600 + in_m * 60 + out_s
    end = out_h * 3600 + out_m * 60 + out_s

    diff_ms = (end - start) * 1000
    minutes = int(diff_ms // 60000)
    hours = minutes // 60
    remainder = abs(minutes) % 60
    if minutes < 0:
        remainder = -remainder

    return f"{hours:02d}:{remainder:02d}"


def pivot_events(events: Iterable[LogEvent], date_format: str = DEFAULT_DATE_FORMAT) -> List[DaySummary]:
    """
    Fold deduplicated events into one DaySummary per (nik, day)

    Rows keep the order in which their (nik, day) key was first seen.
    Events with an unrecognized aksi still open a row but fill no slot.
    """
    summaries: Dict[str, DaySummary] = {}
    slot_times: Dict[str, datetime] = {}

    for event in events:
        day = calendar_day(event)
        key = f"{event.nik}-{day.isoformat()}"

        summary = summaries.get(key)
        if summary is None:
            summary = DaySummary(
                nik=event.nik,
                nama=event.nama,
                kantor=event.kantor,
                tanggal=day.strftime(date_format),
            )
            summaries[key] = summary

        slot = AKSI_SLOTS.get(event.aksi.lower())
        if slot is None:
            continue

        # case variants of one aksi land in separate dedup slots; keep the earliest
        slot_key = f"{key}-{slot}"
        if slot_key in slot_times and slot_times[slot_key] <= event.waktu:
            continue
        slot_times[slot_key] = event.waktu
        setattr(summary, slot, event.waktu.strftime(TIME_FORMAT))

    for summary in summaries.values():
        if summary.jam_masuk and summary.jam_pulang:
            summary.waktu_kerja = compute_work_duration(summary.jam_masuk, summary.jam_pulang)

    return list(summaries.values())


def summarize(events: Iterable[LogEvent], date_format: str = DEFAULT_DATE_FORMAT) -> List[DaySummary]:
    """Deduplicate then pivot"""
    return pivot_events(deduplicate_events(events), date_format=date_format)
