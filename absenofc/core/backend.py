"""
Backend Client - HTTP session against the AbsenOfc REST backend
"""
import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class BackendClient:
    def __init__(self, base_url: str, timeout: int = 20, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_collection(self, path: str) -> List[Dict[str, Any]]:
        """
        Fetch a JSON collection from the backend

        Returns:
            list: Parsed records, empty when the backend answers 204 No Content

        Raises:
            requests.HTTPError: On any other non-2xx response
            requests.RequestException: On connection failures
        """
        url = f"{self.base_url}{path}"
        resp = self.session.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)

        if resp.status_code == 204:
            return []
        if not resp.ok:
            logger.warning("Backend %s answered %s %s", path, resp.status_code, resp.reason)
            resp.raise_for_status()

        data = resp.json()
        return data if isinstance(data, list) else []

    def close(self) -> None:
        self.session.close()
