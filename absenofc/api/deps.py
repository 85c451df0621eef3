from typing import Iterator
from zoneinfo import ZoneInfo

from absenofc.core.backend import BackendClient
from absenofc.core.config import settings


def get_backend() -> Iterator[BackendClient]:
    client = BackendClient(settings.BACKEND_URL, timeout=settings.BACKEND_TIMEOUT_SECONDS)
    try:
        yield client
    finally:
        client.close()


def export_timezone() -> ZoneInfo:
    return ZoneInfo(settings.EXPORT_TIMEZONE)
