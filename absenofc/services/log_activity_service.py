"""
Log Activity Service - filtering, counting and grouping of transactions
"""
import logging
from collections import OrderedDict
from datetime import tzinfo
from typing import Dict, List, Optional

from absenofc.core.backend import BackendClient
from absenofc.repositories.transaksi_repository import (
    TransaksiRepository,
    StatusRepository,
    KantorRepository
)
from absenofc.schemas.transaksi import LogEntry, LogEvent, Status, Kantor
from absenofc.schemas.export import LogActivityResponse
from absenofc.services.log_pipeline import normalize_events, read_entries, DEFAULT_DATE_FORMAT

logger = logging.getLogger(__name__)

ALL = "All"
# date group for transactions whose waktutransaksi could not be read
UNDATED = "-"


def _is_all(value: Optional[str]) -> bool:
    return not value or value == ALL


def filter_by_status(events: List[LogEntry], status: Optional[str] = ALL) -> List[LogEntry]:
    if _is_all(status):
        return events
    wanted = status.lower()
    return [e for e in events if e.status.lower() == wanted]


def filter_by_kantor(events: List[LogEntry], kantor: Optional[str] = ALL) -> List[LogEntry]:
    if _is_all(kantor):
        return events
    wanted = kantor.lower()
    return [e for e in events if e.kantor.lower() == wanted]


def search_events(events: List[LogEntry], term: Optional[str] = "") -> List[LogEntry]:
    """Case-insensitive match on nama or nik"""
    if not term:
        return events
    term = term.lower()
    return [e for e in events if term in e.nama.lower() or term in e.nik.lower()]


def count_by_status(events: List[LogEntry]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for e in events:
        if e.status:
            counts[e.status] = counts.get(e.status, 0) + 1
    return counts


def count_by_kantor(events: List[LogEntry]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for e in events:
        if e.kantor:
            counts[e.kantor] = counts.get(e.kantor, 0) + 1
    return counts


def group_by_date(events: List[LogEntry], date_format: str = DEFAULT_DATE_FORMAT) -> Dict[str, List[LogEntry]]:
    groups: Dict[str, List[LogEntry]] = OrderedDict()
    for e in events:
        key = e.waktu.strftime(date_format) if e.waktu else UNDATED
        groups.setdefault(key, []).append(e)
    return groups


def apply_filters(
    events: List[LogEntry],
    status: Optional[str] = ALL,
    kantor: Optional[str] = ALL,
    search: Optional[str] = ""
) -> List[LogEntry]:
    return search_events(filter_by_kantor(filter_by_status(events, status), kantor), search)


class LogActivityService:
    def __init__(self, tz: Optional[tzinfo] = None, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        self.tz = tz
        self.date_format = date_format
        self.transaksi_repo = TransaksiRepository()
        self.status_repo = StatusRepository()
        self.kantor_repo = KantorRepository()

    def get_entries(self, client: BackendClient) -> List[LogEntry]:
        """Fetch every transaction for listing, without the export drop rule"""
        return read_entries(self.transaksi_repo.get_transaksis(client), self.tz)

    def get_events(self, client: BackendClient) -> List[LogEvent]:
        """Fetch and normalize every transaction usable for export"""
        return normalize_events(self.transaksi_repo.get_transaksis(client), self.tz)

    def get_filtered_events(
        self,
        client: BackendClient,
        status: Optional[str] = ALL,
        kantor: Optional[str] = ALL,
        search: Optional[str] = ""
    ) -> List[LogEvent]:
        return apply_filters(self.get_events(client), status, kantor, search)

    def get_log_activity(
        self,
        client: BackendClient,
        status: Optional[str] = ALL,
        kantor: Optional[str] = ALL,
        search: Optional[str] = ""
    ) -> LogActivityResponse:
        """
        Build the Log Activity view

        Every transaction is listed and counted, including those without
        NIK or timestamp that the export leaves out. Status counts cover
        every transaction; kantor counts cover the status-filtered ones only.
        """
        events = self.get_entries(client)
        by_status = filter_by_status(events, status)
        filtered = search_events(filter_by_kantor(by_status, kantor), search)

        return LogActivityResponse(
            total=len(filtered),
            status_counts=count_by_status(events),
            kantor_counts=count_by_kantor(by_status),
            groups=group_by_date(filtered, self.date_format)
        )

    def list_statuses(self, client: BackendClient) -> List[Status]:
        return self.status_repo.get_all(client)

    def list_kantors(self, client: BackendClient) -> List[Kantor]:
        return self.kantor_repo.get_all(client)
