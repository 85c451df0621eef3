"""
CSV Serializer - semicolon-delimited text with BOM for spreadsheet apps
"""
from typing import Iterable, List

from absenofc.schemas.export import DaySummary

BOM = "\ufeff"
DELIMITER = ";"
LINE_SEPARATOR = "\n"

HEADER = ["nik", "nama", "kantor", "tanggal", "Jam Masuk", "Jam Pulang", "Jam Izin"]
HEADER_WAKTU_KERJA = HEADER + ["Waktu Kerja"]


def _quote(value: str, escape_quotes: bool) -> str:
    value = "" if value is None else str(value)
    if escape_quotes:
        value = value.replace('"', '""')
    return f'"{value}"'


def _row(values: Iterable[str], escape_quotes: bool) -> str:
    return DELIMITER.join(_quote(v, escape_quotes) for v in values)


def summary_fields(summary: DaySummary, include_work_duration: bool = False) -> List[str]:
    fields = [
        summary.nik,
        summary.nama,
        summary.kantor,
        summary.tanggal,
        summary.jam_masuk,
        summary.jam_pulang,
        summary.jam_izin,
    ]
    if include_work_duration:
        fields.append(summary.waktu_kerja)
    return fields


def serialize_summaries(
    summaries: Iterable[DaySummary],
    include_work_duration: bool = False,
    escape_quotes: bool = False
) -> str:
    """
    Render summaries as CSV text

    Values are written verbatim between quotes unless escape_quotes is set,
    in which case embedded quotes are doubled. Empty input still yields the
    BOM, the header and a trailing newline.
    """
    header = HEADER_WAKTU_KERJA if include_work_duration else HEADER
    body = LINE_SEPARATOR.join(
        _row(summary_fields(s, include_work_duration), escape_quotes)
        for s in summaries
    )
    return BOM + _row(header, escape_quotes) + LINE_SEPARATOR + body
