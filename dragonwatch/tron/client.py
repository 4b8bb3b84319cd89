"""
TRON ledger client.

Fetches blocks from a TronGrid-compatible node and turns them into
classified Outcome records. Rate limiting (HTTP 429) and transport errors
are retried with exponential backoff; every other failure surfaces as a
TronError subclass.
"""
from __future__ import annotations
import logging
import time
from typing import Dict, Iterator, List, Optional

import requests

from dragonwatch.core.classify import format_timestamp
from dragonwatch.core.models import Outcome

logger = logging.getLogger(__name__)


class TronError(Exception):
    pass


class TronApiError(TronError):
    pass


class RateLimitError(TronApiError):
    pass


class BlockNotFoundError(TronError):
    pass


def transform_block(raw: Dict) -> Outcome:
    header = raw["block_header"]["raw_data"]
    return Outcome.from_hash(
        height=header["number"],
        hash=raw["blockID"],
        timestamp=format_timestamp(header["timestamp"]),
    )


class TronClient:
    def __init__(self, base_url: str, api_key: Optional[str] = None,
                 retries: int = 3, backoff: float = 0.5, timeout: float = 10,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.retries = retries
        self.backoff = backoff
        self.timeout = timeout
        self.session = session or requests.Session()
        self.cache: Dict[int, Outcome] = {}

    def _headers(self) -> Dict[str, str]:
        h = {
            "Accept": "application/json",
            "Content-Type": "application/json; charset=utf-8",
        }
        if self.api_key:
            h["TRON-PRO-API-KEY"] = self.api_key
        return h

    def _request_once(self, path: str, payload: Dict) -> Dict:
        try:
            resp = self.session.post(f"{self.base_url}{path}", json=payload,
                                     headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise TronApiError(f"Request failed: {e}") from e
        if resp.status_code == 429:
            raise RateLimitError("Rate limit exceeded (429). Please try again later.")
        if not resp.ok:
            raise TronApiError(f"HTTP Error: {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise TronApiError(f"Malformed response from {path}") from e
        if isinstance(data, dict) and data.get("Error"):
            raise TronApiError(str(data["Error"]))
        return data

    def _post(self, path: str, payload: Dict) -> Dict:
        delay = self.backoff
        attempt = 0
        while True:
            try:
                return self._request_once(path, payload)
            except TronApiError as e:
                if attempt >= self.retries:
                    raise
                attempt += 1
                logger.warning("[TronClient] %s failed (%s), retrying in %ss (attempt %d/%d)",
                               path, e, delay, attempt, self.retries)
                time.sleep(delay)
                delay *= 2

    def latest_block(self) -> Dict:
        return self._post("/wallet/getnowblock", {})

    def latest_height(self) -> int:
        return self.latest_block()["block_header"]["raw_data"]["number"]

    def block_by_num(self, num: int) -> Outcome:
        if num in self.cache:
            return self.cache[num]
        data = self._post("/wallet/getblockbynum", {"num": num})
        if not data.get("blockID"):
            raise BlockNotFoundError(f"Block {num} not found")
        block = transform_block(data)
        self.cache[num] = block
        return block

    def iter_recent_blocks(self, count: int, skip: Optional[set] = None) -> Iterator[Outcome]:
        """Yield the `count` latest blocks, oldest first. Heights in `skip` are not fetched."""
        if count <= 0:
            return
        latest = self.latest_height()
        start = max(0, latest - count + 1)
        for h in range(start, latest + 1):
            if skip and h in skip:
                continue
            yield self.block_by_num(h)

    def recent_blocks(self, count: int, skip: Optional[set] = None) -> List[Outcome]:
        out = list(self.iter_recent_blocks(count, skip=skip))
        logger.info("[TronClient] fetched %d blocks", len(out))
        return out
