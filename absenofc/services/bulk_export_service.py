"""
Bulk Export Service - one CSV document per known user
"""
import logging
import re
from datetime import tzinfo
from typing import Dict, List, Optional

from absenofc.core.backend import BackendClient
from absenofc.repositories.transaksi_repository import TransaksiRepository
from absenofc.repositories.user_repository import UserRepository
from absenofc.schemas.transaksi import LogEvent
from absenofc.schemas.user import User
from absenofc.schemas.export import DaySummary, ExportDocument
from absenofc.services.csv_serializer import serialize_summaries
from absenofc.services.emission_queue import EmissionQueue, Sink
from absenofc.services.log_pipeline import normalize_events, summarize, DEFAULT_DATE_FORMAT
from atams.exceptions import BadRequestException

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")
_PATH_CHARS = re.compile(r"[/\\\x00]")


def sanitize_name(nama: str) -> str:
    return _UNSAFE_CHARS.sub("_", nama or "")


def bulk_filename(base_name: str, nik: str, nama: str) -> str:
    return f"{base_name}_{nik}_{sanitize_name(nama)}.csv"


def validate_base_name(base_name: Optional[str]) -> str:
    if base_name is None or not base_name.strip():
        raise BadRequestException("Base file name is required for bulk export")
    if _PATH_CHARS.search(base_name):
        raise BadRequestException("Base file name must not contain path separators")
    return base_name


def validate_identities(niks: List[str]) -> None:
    """NIKs go into file names unchanged, so none may carry a path separator"""
    unsafe = [nik for nik in niks if _PATH_CHARS.search(nik)]
    if unsafe:
        raise BadRequestException(f"NIK cannot be used in an export file name: {unsafe[0]!r}")


class BulkExportService:
    def __init__(
        self,
        tz: Optional[tzinfo] = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        delay_ms: int = 500,
        escape_quotes: bool = False
    ) -> None:
        self.tz = tz
        self.date_format = date_format
        self.delay_ms = delay_ms
        self.escape_quotes = escape_quotes
        self.transaksi_repo = TransaksiRepository()
        self.user_repo = UserRepository()

    def build_documents(self, base_name: str, users: List[User], events: List[LogEvent]) -> List[ExportDocument]:
        """
        Build one document per identity known to the roster or the log

        Roster identities come first in roster order, then identities that
        only appear in the log, in order of first appearance. A user without
        events still gets a single placeholder row.

        Raises:
            BadRequestException: If a NIK contains a path separator, before
                any document is built
        """
        roster: Dict[str, User] = {}
        for user in users:
            roster.setdefault(user.nik, user)

        events_by_nik: Dict[str, List[LogEvent]] = {}
        for event in events:
            events_by_nik.setdefault(event.nik, []).append(event)

        identities = list(roster)
        identities += [nik for nik in events_by_nik if nik not in roster]
        validate_identities(identities)

        documents = []
        for nik in identities:
            user_events = events_by_nik.get(nik, [])
            if nik in roster:
                nama = roster[nik].nama or ""
                kantor = roster[nik].namakantor
            else:
                nama = user_events[0].nama
                kantor = user_events[0].kantor

            summaries = summarize(user_events, date_format=self.date_format)
            if not summaries:
                summaries = [DaySummary(nik=nik, nama=nama, kantor=kantor)]

            content = serialize_summaries(
                summaries,
                include_work_duration=True,
                escape_quotes=self.escape_quotes
            )
            documents.append(ExportDocument(
                filename=bulk_filename(base_name, nik, nama),
                content=content,
                rows=len(summaries)
            ))

        return documents

    async def export_all(self, client: BackendClient, base_name: Optional[str], sink: Sink) -> List[str]:
        """
        Export every user's attendance to its own document

        Args:
            client: Backend client
            base_name: Prefix for every file name, required
            sink: Awaitable receiving each document in turn

        Returns:
            list: Emitted file names, in emission order

        Raises:
            BadRequestException: If base_name is missing or a NIK is unusable
                as a file name, before anything is emitted
        """
        base_name = validate_base_name(base_name)

        users = self.user_repo.get_roster(client)
        events = normalize_events(self.transaksi_repo.get_transaksis(client), self.tz)

        queue = EmissionQueue(delay_ms=self.delay_ms)
        for document in self.build_documents(base_name, users, events):
            queue.put(document)

        logger.info("Bulk export %s: %d users, %d events", base_name, len(queue), len(events))
        return await queue.drain(sink)
