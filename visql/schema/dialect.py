"""Pydantic model for the DialectProfile used when rendering a QueryModel.

The profile selects the compiler backend and the layout of the emitted
text.  It is passed explicitly to :func:`visql.compile_query` and to
:class:`~visql.session.session.QuerySession`; visql reads no environment
variables or configuration files::

    from visql import DialectProfile

    preview = DialectProfile(target="ansi")
    sqlite = DialectProfile(target="sqlite", single_line=True)
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DialectProfile(BaseModel):
    """Backend target and layout options for SQL generation.

    Attributes:
        target: Name of a compiler registered with
            :class:`~visql.compile.registry.CompilerFactory`.  ``'ansi'``
            inlines escaped literals and leaves identifiers unquoted (the
            live preview); the others emit named placeholders and bind
            literals as parameters.
        single_line: Join clauses with a space instead of a newline.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: str = "postgres"
    single_line: bool = False

    @property
    def clause_separator(self) -> str:
        """The string placed between two clauses of a statement."""
        return " " if self.single_line else "\n"


#: Profile used for the live preview text.
PREVIEW_PROFILE = DialectProfile(target="ansi")
