"""visql editing layer: clause-level mutations of a QueryModel."""
from visql.edit.editor import QueryEditor

__all__ = ["QueryEditor"]
