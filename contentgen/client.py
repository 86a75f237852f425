import json
import logging
from typing import Any, Dict, List, Optional

import requests

from contentgen.models import FileRecord, FileStatus, StatusUpdate

logger = logging.getLogger(__name__)


class FilesClient:
    """Thin client for the pending-files API."""

    def __init__(self, server_url: str, timeout: float = 30, session: Optional[requests.Session] = None):
        if not (server_url.startswith("http://") or server_url.startswith("https://")):
            server_url = "https://" + server_url
        self.server_url = server_url.rstrip("/")
        self.files_url = f"{self.server_url}/api/files"
        self.timeout = timeout
        self.session = session or requests.Session()

    def list_files(self) -> List[Dict[str, Any]]:
        """Fetch every file record known to the API, as raw dicts."""
        resp = self.session.get(self.files_url, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of file records from {self.files_url}, got {type(data).__name__}")
        return data

    def get_pending(self, batch_size: int) -> List[FileRecord]:
        """
        Return at most batch_size records whose status is Pending, in the
        order the API listed them.
        """
        # Filter and truncate before validating: records we skip may lack fields we never read.
        pending = [
            record for record in self.list_files()
            if isinstance(record, dict) and record.get("status") == FileStatus.PENDING.value
        ]
        logger.debug(f"{len(pending)} pending records upstream, taking up to {batch_size}")
        return [FileRecord(**record) for record in pending[:batch_size]]

    def fetch_prompt(self, url: str) -> str:
        """
        Download a prompt payload. JSON payloads that are not plain strings are
        serialized back to text.
        """
        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()

        content_type = resp.headers.get("Content-Type", "")
        if "json" not in content_type:
            if "charset" not in content_type.lower():
                resp.encoding = "utf-8"
            return resp.text

        payload: Any = resp.json()
        if isinstance(payload, str):
            return payload
        return json.dumps(payload)

    def mark_complete(self, file_id: str) -> StatusUpdate:
        """PUT the AlreadyCopy status for file_id and return what was sent."""
        update = StatusUpdate()
        url = f"{self.files_url}/{file_id}"
        resp = self.session.put(url, json=update.model_dump(mode="json", by_alias=True), timeout=self.timeout)
        resp.raise_for_status()
        return update
