"""Compiler registry.

``CompilerFactory``
    Central registry for :class:`~visql.compile.base.SQLCompiler`
    implementations.  Register a new compiler once; ``compile_query`` and
    ``QuerySession`` look it up by ``DialectProfile.target``.

Usage::

    from visql.compile.registry import CompilerFactory

    @CompilerFactory.register("oracle")
    class OracleCompiler(SQLCompiler):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from visql.compile.base import SQLCompiler
from visql.errors import ProfileConfigError


class CompilerFactory:
    """Registry mapping dialect target names to :class:`SQLCompiler` classes.

    Callers register a compiler class once; the pipeline creates instances
    on demand via :meth:`create`.

    Example::

        @CompilerFactory.register("oracle")
        class OracleCompiler(SQLCompiler):
            ...

        compiler = CompilerFactory.create("oracle")
    """

    _compilers: ClassVar[dict[str, type[SQLCompiler]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLCompiler]], type[SQLCompiler]]:
        """Decorator that registers a compiler class under ``name``.

        Args:
            name: The dialect target name (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the compiler class.
        """

        def decorator(compiler_cls: type[SQLCompiler]) -> type[SQLCompiler]:
            cls._compilers[name] = compiler_cls
            return compiler_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, compiler_cls: type[SQLCompiler]) -> None:
        """Register a compiler class without using the decorator form.

        Args:
            name: The dialect target name.
            compiler_cls: The :class:`SQLCompiler` subclass to register.
        """
        cls._compilers[name] = compiler_cls

    @classmethod
    def create(cls, name: str) -> SQLCompiler:
        """Instantiate the compiler registered for ``name``.

        Args:
            name: The dialect target name.

        Returns:
            A fresh :class:`SQLCompiler` instance.

        Raises:
            ProfileConfigError: If no compiler is registered for ``name``.
        """
        compiler_cls = cls._compilers.get(name)
        if compiler_cls is None:
            registered = sorted(cls._compilers)
            raise ProfileConfigError(
                f"Unsupported dialect target: '{name}'. Registered targets: {registered}.",
                target=name,
                registered=registered,
            )
        return compiler_cls()

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect target names."""
        return sorted(cls._compilers)
