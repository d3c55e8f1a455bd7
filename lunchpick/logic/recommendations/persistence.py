import logging

from lunchpick.domain.Draft import Draft
from lunchpick.domain.Recommendation import Recommendation
from lunchpick.infra.Entity_Store import EntityStore
from lunchpick.infra.Recommendation_Repository import RecommendationRepository
from lunchpick.logic.recommendations.draft import validate_draft

logger = logging.getLogger(__name__)


class PersistenceMediator:
    """Turns a draft into a full recommendation and submits it as create or update.

    The draft is only read, so a failed save leaves the user's edits intact.
    Refreshing the repository afterwards is the caller's job.
    """

    def __init__(self, repository: RecommendationRepository, store: EntityStore):
        self._repository = repository
        self._store = store

    async def save(self, date: str, draft: Draft, has_existing: bool) -> Recommendation:
        validate_draft(draft, self._store)
        record = draft.to_recommendation(date)
        if has_existing:
            saved = await self._repository.update(date, record)
        else:
            saved = await self._repository.create(record)
        logger.info("Saved recommendation for %s (%s)", date, "update" if has_existing else "create")
        return saved
