import logging
from typing import List, Optional

from lunchpick.domain.Recommendation import Recommendation
from lunchpick.infra.Data_Source import DataSource
from lunchpick.utilities.errors import TransportError

logger = logging.getLogger(__name__)


class RecommendationRepository:
    """Date-keyed cache of Recommendation records.

    The cache is only replaced by `load_all`. `create` and `update` go
    straight to the data source; callers reload afterwards before trusting
    `find` again.
    """

    def __init__(self, data_source: DataSource):
        self._source = data_source
        self._records: List[Recommendation] = []
        self._load_seq = 0

    @property
    def records(self) -> List[Recommendation]:
        return list(self._records)

    async def load_all(self) -> Optional[List[Recommendation]]:
        """Replace the cache with a fresh fetch.

        Returns None (and leaves the cache alone) when a newer load was issued
        while this one was in flight; the most recent load always wins.
        """
        self._load_seq += 1
        seq = self._load_seq
        data = await self._source.request("GET", "/recommendations")
        if seq != self._load_seq:
            logger.info("Discarding superseded recommendations load #%d (latest is #%d)", seq, self._load_seq)
            return None
        if not isinstance(data, dict) or not isinstance(data.get("recommendations"), list):
            raise TransportError("Malformed response: expected a 'recommendations' list")
        records = [Recommendation.from_dict(r) for r in data["recommendations"]]
        self._records = records
        logger.info("Loaded %d recommendations", len(records))
        return list(records)

    def find(self, date: str) -> Optional[Recommendation]:
        for record in self._records:
            if record.date == date:
                return record
        return None

    def dates(self) -> List[str]:
        return sorted(r.date for r in self._records)

    async def fetch(self, date: str) -> Optional[Recommendation]:
        """Ask the data source for one date directly, bypassing the cache."""
        try:
            data = await self._source.request("GET", f"/recommendations/{date}")
        except TransportError as e:
            if e.status == 404:
                return None
            raise
        if not isinstance(data, dict) or "error" in data:
            return None
        return Recommendation.from_dict(data)

    async def create(self, record: Recommendation) -> Recommendation:
        data = await self._source.request("POST", "/recommendations", record.to_payload())
        logger.info("Created recommendation for %s", record.date)
        return Recommendation.from_dict(data)

    async def update(self, date: str, record: Recommendation) -> Recommendation:
        payload = record.to_payload()
        payload["date"] = date
        data = await self._source.request("PUT", f"/recommendations/{date}", payload)
        logger.info("Updated recommendation for %s", date)
        return Recommendation.from_dict(data)
