"""
Export Service - filtered Log Activity export as a single CSV document
"""
import logging
from datetime import tzinfo
from typing import List, Optional

from absenofc.core.backend import BackendClient
from absenofc.schemas.transaksi import LogEvent
from absenofc.schemas.export import ExportDocument
from absenofc.services.csv_serializer import serialize_summaries
from absenofc.services.log_activity_service import LogActivityService, ALL
from absenofc.services.log_pipeline import summarize, DEFAULT_DATE_FORMAT

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "log_activity"


def build_document(
    name: str,
    events: List[LogEvent],
    date_format: str = DEFAULT_DATE_FORMAT,
    include_work_duration: bool = False,
    escape_quotes: bool = False
) -> ExportDocument:
    """Run dedup, pivot and serialization over already filtered events"""
    summaries = summarize(events, date_format=date_format)
    content = serialize_summaries(
        summaries,
        include_work_duration=include_work_duration,
        escape_quotes=escape_quotes
    )
    return ExportDocument(filename=f"{name}.csv", content=content, rows=len(summaries))


class ExportService:
    def __init__(
        self,
        tz: Optional[tzinfo] = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        default_name: str = DEFAULT_EXPORT_NAME,
        escape_quotes: bool = False
    ) -> None:
        self.date_format = date_format
        self.default_name = default_name
        self.escape_quotes = escape_quotes
        self.log_activity = LogActivityService(tz=tz, date_format=date_format)

    def export_filtered(
        self,
        client: BackendClient,
        status: Optional[str] = ALL,
        kantor: Optional[str] = ALL,
        search: Optional[str] = "",
        name: Optional[str] = None,
        with_work_duration: bool = False
    ) -> ExportDocument:
        """
        Export the currently filtered Log Activity

        Args:
            client: Backend client
            status: Status filter, "All" for none
            kantor: Kantor filter, "All" for none
            search: Substring on nama or nik
            name: File name without extension, defaults to default_name
            with_work_duration: Add the Waktu Kerja column

        Returns:
            ExportDocument: The CSV document
        """
        events = self.log_activity.get_filtered_events(client, status, kantor, search)
        name = (name or "").strip() or self.default_name

        document = build_document(
            name,
            events,
            date_format=self.date_format,
            include_work_duration=with_work_duration,
            escape_quotes=self.escape_quotes
        )
        logger.info("Exported %s: %d events -> %d rows", document.filename, len(events), document.rows)
        return document
