"""visql session layer: execution, saved queries and the editing session."""
from visql.session.interfaces import ExecutionInvoker, ExecutionResult, SavedQueryStore
from visql.session.session import QuerySession
from visql.session.store import InMemoryQueryStore

__all__ = [
    "ExecutionInvoker",
    "ExecutionResult",
    "SavedQueryStore",
    "QuerySession",
    "InMemoryQueryStore",
]
