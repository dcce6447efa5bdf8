"""visql validation layer: opt-in checks of a QueryModel against a catalog."""
from visql.validate.validator import QueryValidator

__all__ = ["QueryValidator"]
