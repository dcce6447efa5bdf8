"""Editing session: one query model wired to its external services.

``QuerySession`` is what a front end holds while the user works on a query.
It owns a :class:`~visql.edit.editor.QueryEditor` and receives the schema
catalog, the execution invoker and the saved-query store by injection::

    session = QuerySession(catalog, SQLAlchemyExecutor(engine))
    session.editor.add_table("users").add_column("users.email")
    print(session.sql)          # preview text
    result = session.execute()  # ExecutionResult, or None when empty
"""
from __future__ import annotations

import logging

from visql.compile.ansi import AnsiCompiler
from visql.compile.base import CompiledSQL
from visql.compile.builder import QueryBuilder
from visql.compile.registry import CompilerFactory
from visql.edit.editor import QueryEditor
from visql.schema.catalog import CatalogSnapshot, SchemaCatalog
from visql.schema.dialect import PREVIEW_PROFILE, DialectProfile
from visql.schema.query_model import QueryModel
from visql.session.interfaces import ExecutionInvoker, ExecutionResult, SavedQueryStore
from visql.session.store import InMemoryQueryStore
from visql.validate.validator import QueryValidator

logger = logging.getLogger(__name__)


class QuerySession:
    """Holds one query under construction.

    Args:
        catalog: Source of the tables and columns the user can pick from.
        executor: Runs compiled SQL.
        store: Saved-query persistence; an :class:`InMemoryQueryStore` when
            omitted.
        profile: Dialect used for execution.  Must match the placeholder
            style ``executor`` accepts; ``sqlite`` (``:name``) suits
            :class:`~visql.session.executor.SQLAlchemyExecutor`.
        model: Model to start from; a fresh empty model when omitted.
    """

    def __init__(
        self,
        catalog: SchemaCatalog,
        executor: ExecutionInvoker,
        store: SavedQueryStore | None = None,
        profile: DialectProfile | None = None,
        model: QueryModel | None = None,
    ) -> None:
        self._catalog = catalog
        self._executor = executor
        self._store = store if store is not None else InMemoryQueryStore()
        self._profile = profile or DialectProfile(target="sqlite")
        self._editor = QueryEditor(model)

    @property
    def editor(self) -> QueryEditor:
        return self._editor

    @property
    def model(self) -> QueryModel:
        return self._editor.model

    @property
    def sql(self) -> str:
        """Preview text for the current model."""
        return QueryBuilder(AnsiCompiler(), PREVIEW_PROFILE).build(self.model).sql

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def available_columns(self) -> list[str]:
        """Qualified columns of the selected tables, for the column picker."""
        snapshot = CatalogSnapshot.from_catalog(self._catalog)
        return snapshot.qualified_columns(self.model.tables)

    def validate(self) -> None:
        """Check the model against the catalog.

        Raises:
            ValidationError: (or subclass) on the first violation.
        """
        QueryValidator(self._catalog).validate(self.model)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def compile(self) -> CompiledSQL:
        """Compile the model for the session's execution dialect.

        Raises:
            ProfileConfigError: If the profile's target is not registered.
            CompilationError: If the model cannot be made executable.
        """
        compiler = CompilerFactory.create(self._profile.target)
        return QueryBuilder(compiler, self._profile).build(self.model)

    def execute(self) -> ExecutionResult | None:
        """Compile and run the model.

        Returns:
            The invoker's result, unmodified, or ``None`` when the model has
            no tables and so nothing to run.
        """
        compiled = self.compile()
        if compiled.is_empty:
            logger.info("Nothing to execute for %s: no tables selected", self.model.id)
            return None

        logger.info("Executing %s query %s", compiled.statement_kind.value, self.model.id)
        result = self._executor.execute(compiled.sql, compiled.params)
        if result.error is not None:
            logger.warning("Query %s failed: %s", self.model.id, result.error)
        return result

    # ------------------------------------------------------------------
    # Saved queries
    # ------------------------------------------------------------------

    def save(self) -> str:
        """Save the current model and return its store id."""
        query_id = self._store.save(self.model)
        logger.info("Saved query %s", query_id)
        return query_id

    def saved_queries(self) -> list[QueryModel]:
        return self._store.list()

    def load(self, query_id: str) -> QueryModel:
        """Replace the current model with a saved one.

        The current model is kept when the store fails.

        Raises:
            StoreError: (or :class:`~visql.errors.QueryNotFoundError`) as
                raised by the store.
        """
        model = self._store.load(query_id)
        self._editor = QueryEditor(model)
        logger.info("Loaded query %s", query_id)
        return model
