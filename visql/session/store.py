"""In-memory saved-query store."""
from __future__ import annotations

import logging

from visql.errors import QueryNotFoundError
from visql.schema.query_model import QueryModel, new_entry_id

logger = logging.getLogger(__name__)

#: Name given to queries saved with a blank name.
UNTITLED_QUERY_NAME = "Untitled Query"


class InMemoryQueryStore:
    """A :class:`~visql.session.interfaces.SavedQueryStore` held in a dict.

    Models are deep-copied on the way in and on the way out, so edits made
    after saving or loading never leak into the stored copy.

    Args:
        queries: Optional models to seed the store with, kept under their
            own ids.
    """

    def __init__(self, queries: list[QueryModel] | None = None) -> None:
        self._queries: dict[str, QueryModel] = {}
        for query in queries or []:
            self._queries[query.id] = query.model_copy(deep=True)

    def save(self, model: QueryModel) -> str:
        """Store a copy of ``model`` under a fresh id and return the id."""
        query_id = new_entry_id("query")
        self._queries[query_id] = model.model_copy(
            update={"id": query_id, "name": model.name.strip() or UNTITLED_QUERY_NAME},
            deep=True,
        )
        logger.info("Saved query %s as %s", model.name, query_id)
        return query_id

    def list(self) -> list[QueryModel]:
        """Return copies of all saved models in save order."""
        return [q.model_copy(deep=True) for q in self._queries.values()]

    def load(self, query_id: str) -> QueryModel:
        """Return a copy of the model saved under ``query_id``.

        Raises:
            QueryNotFoundError: If ``query_id`` is unknown.
        """
        query = self._queries.get(query_id)
        if query is None:
            raise QueryNotFoundError(query_id)
        return query.model_copy(deep=True)
