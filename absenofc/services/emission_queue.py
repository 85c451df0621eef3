"""
Emission Queue - sequential document emission with a fixed pause between items
"""
import asyncio
import logging
import os
from typing import Awaitable, Callable, List

from absenofc.schemas.export import ExportDocument
from atams.exceptions import BadRequestException

logger = logging.getLogger(__name__)

Sink = Callable[[ExportDocument], Awaitable[None]]


class DirectorySink:
    """Write each document into a directory as UTF-8"""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def resolve(self, filename: str) -> str:
        """Absolute target path; must stay directly inside the directory"""
        directory = os.path.realpath(self.directory)
        path = os.path.realpath(os.path.join(directory, filename))
        if os.path.dirname(path) != directory:
            raise BadRequestException(f"Export file name escapes the export directory: {filename}")
        return path

    def _write(self, path: str, data: bytes) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as fh:
            fh.write(data)

    async def __call__(self, document: ExportDocument) -> None:
        path = self.resolve(document.filename)
        await asyncio.to_thread(self._write, path, document.encode())
        logger.debug("Wrote %s (%d rows)", path, document.rows)


class EmissionQueue:
    def __init__(self, delay_ms: int = 500) -> None:
        self.delay_ms = delay_ms
        self._documents: List[ExportDocument] = []

    def put(self, document: ExportDocument) -> None:
        self._documents.append(document)

    def __len__(self) -> int:
        return len(self._documents)

    async def drain(self, sink: Sink) -> List[str]:
        """
        Emit queued documents one at a time, in order

        Sleeps delay_ms between successive emissions, never before the first
        or after the last. Returns the emitted filenames.
        """
        emitted = []
        while self._documents:
            document = self._documents.pop(0)
            if emitted and self.delay_ms > 0:
                await asyncio.sleep(self.delay_ms / 1000)
            await sink(document)
            emitted.append(document.filename)
        return emitted
