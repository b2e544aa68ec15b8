"""
ACM configuration snapshot service.

A snapshot bundles the rate table, scheme configuration, cost matrix and
document table of one ACM edition. Snapshots are immutable; updates build a
new snapshot and publish it with a single reference swap, so calculations in
flight keep the snapshot they captured.
"""
import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..data import baseline_document
from ..exceptions import SnapshotLoadError
from ..models.acm import AcmSnapshot

logger = logging.getLogger(__name__)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base; nested dicts merge, everything else replaces"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        key = str(key)
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class SnapshotStore:
    """Holds the current snapshot; readers never lock, writers serialise on publish"""

    def __init__(self, snapshot: Optional[AcmSnapshot] = None):
        self._snapshot = snapshot
        self._lock = threading.Lock()

    def current(self) -> Optional[AcmSnapshot]:
        return self._snapshot

    def publish(self, snapshot: AcmSnapshot) -> Optional[AcmSnapshot]:
        """Swap in a new snapshot and return the previous one"""
        with self._lock:
            previous = self._snapshot
            self._snapshot = snapshot
        return previous


class SnapshotService:
    """Loads ACM snapshots from the baseline, JSON files or HTTP and publishes them"""

    def __init__(self, store: Optional[SnapshotStore] = None):
        self.store = store or SnapshotStore()
        self._baseline: Optional[AcmSnapshot] = None

    def baseline_document(self) -> Dict[str, Any]:
        """Built-in edition as JSON-compatible data with string keys"""
        return json.loads(json.dumps(baseline_document()))

    def baseline(self) -> AcmSnapshot:
        if self._baseline is None:
            self._baseline = self.build(self.baseline_document(), source="baseline")
        return self._baseline

    def build(self, document: Dict[str, Any], source: str = "document") -> AcmSnapshot:
        """
        Validate a (possibly partial) snapshot document merged over the baseline

        Args:
            document: Snapshot data; sections absent here keep their baseline values
            source: Description of where the document came from, for errors

        Returns:
            Validated snapshot

        Raises:
            SnapshotLoadError: If the merged document fails validation
        """
        if not isinstance(document, dict):
            raise SnapshotLoadError(source, "snapshot document must be a JSON object")
        merged = _deep_merge(self.baseline_document(), document)
        try:
            return AcmSnapshot.model_validate(merged)
        except ValidationError as e:
            raise SnapshotLoadError(source, f"{e.error_count()} validation error(s): {e}") from e

    def load_file(self, path: str) -> AcmSnapshot:
        """Read a JSON snapshot document from disk"""
        file_path = Path(path)
        try:
            document = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise SnapshotLoadError(str(file_path), f"cannot read file: {e}") from e
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(str(file_path), f"invalid JSON: {e}") from e

        snapshot = self.build(document, source=str(file_path))
        logger.info(f"Loaded ACM snapshot {snapshot.version.acm_table_edition} from {file_path}")
        return snapshot

    async def fetch(self, url: str, timeout: Optional[float] = None) -> AcmSnapshot:
        """Retrieve a JSON snapshot document over HTTP"""
        headers = {
            "Accept": "application/json",
            "User-Agent": settings.acm_user_agent
        }
        try:
            async with httpx.AsyncClient(timeout=timeout or settings.acm_fetch_timeout) as client:
                response = await client.get(url, headers=headers)

            if response.status_code != 200:
                logger.error(f"ACM snapshot endpoint error: {response.status_code} - {response.text[:200]}")
                raise SnapshotLoadError(url, f"HTTP {response.status_code}")

            document = response.json()

        except httpx.TimeoutException as e:
            raise SnapshotLoadError(url, "request timed out") from e
        except httpx.RequestError as e:
            raise SnapshotLoadError(url, f"request failed: {e}") from e
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(url, f"invalid JSON: {e}") from e

        snapshot = self.build(document, source=url)
        logger.info(f"Fetched ACM snapshot {snapshot.version.acm_table_edition} from {url}")
        return snapshot

    def publish(self, snapshot: AcmSnapshot) -> None:
        previous = self.store.publish(snapshot)
        if previous is not None and previous.version != snapshot.version:
            logger.info(
                f"ACM snapshot updated: {previous.version.acm_table_edition} -> "
                f"{snapshot.version.acm_table_edition}"
            )
        else:
            logger.info(f"ACM snapshot published: {snapshot.version.acm_table_edition}")

    def current(self) -> AcmSnapshot:
        """Current snapshot, publishing the baseline on first use"""
        snapshot = self.store.current()
        if snapshot is None:
            snapshot = self.baseline()
            self.publish(snapshot)
        return snapshot

    async def load_configured(
        self,
        path: Optional[str] = None,
        url: Optional[str] = None
    ) -> AcmSnapshot:
        """
        Load the configured snapshot (file, then URL, then baseline) and publish it

        A source that fails to load is logged and the next one is tried; the
        baseline always succeeds.
        """
        path = path if path is not None else settings.acm_snapshot_path
        url = url if url is not None else settings.acm_snapshot_url

        snapshot = None
        if path:
            try:
                snapshot = self.load_file(path)
            except SnapshotLoadError as e:
                logger.warning(f"{e} - trying next source")

        if snapshot is None and url:
            try:
                snapshot = await self.fetch(url)
            except SnapshotLoadError as e:
                logger.warning(f"{e} - falling back to baseline edition")

        if snapshot is None:
            snapshot = self.baseline()

        self.publish(snapshot)
        return snapshot


# Global snapshot service instance
snapshot_service = SnapshotService()
