"""Delete the auctions a test created, over plain HTTP.

The browser session cookies are forwarded so the API sees the same user.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

import httpx

from transport_ui_tests.errors import UnexpectedStatus
from transport_ui_tests.log import get_logger

AUCTION_PATH = "/api/v1/auctions/{auction_id}/"

log = get_logger("cleanup")


@dataclass
class CreatedAuctions:
    """Auction ids created by one test; owned by that test's fixture."""

    ids: List[int] = field(default_factory=list)

    def record(self, ids: Iterable[int]) -> None:
        self.ids.extend(ids)

    def drain(self) -> List[int]:
        drained, self.ids = self.ids, []
        return drained


def cookie_header(cookies: Iterable[Mapping[str, str]]) -> Optional[str]:
    """``Cookie`` header value for Playwright cookie dicts (already URL-filtered)."""
    pairs = [f"{c['name']}={c['value']}" for c in cookies]
    return "; ".join(pairs) if pairs else None


class AuctionCleanup:
    def __init__(
        self,
        base_url: str,
        cookie: Optional[str] = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cookie = cookie
        self.timeout = timeout
        self._transport = transport

    async def delete_all(self, ids: Iterable[int]) -> Dict[int, int]:
        """DELETE every id, then fail once if any did not answer 204.

        An empty id list is a no-op.
        """
        ids = list(ids)
        if not ids:
            log.info("No auctions to delete")
            return {}

        headers = {"Cookie": self.cookie} if self.cookie else {}
        statuses: Dict[int, int] = {}
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            for auction_id in ids:
                path = AUCTION_PATH.format(auction_id=auction_id)
                response = await client.delete(path, params={"includeMerged": "false"})
                log.info(f"DELETE {path} -> {response.status_code}")
                statuses[auction_id] = response.status_code

        failed = {auction_id: status for auction_id, status in statuses.items() if status != 204}
        if failed:
            raise UnexpectedStatus(
                name="cleanup",
                message=f"expected 204 for every auction delete, got {failed}",
                payload={"statuses": statuses},
            )
        return statuses
