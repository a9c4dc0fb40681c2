"""Shared view plumbing: per-request persistence context injection."""

from __future__ import annotations

from .context import PersistenceContext


class PersistenceContextMixin:
    """
    Give a class-based view its own ``PersistenceContext``.

    Django builds a fresh view instance for every request, so the context
    created here lives exactly as long as the request.  Tests (or another
    database alias) can swap it by overriding ``context_class`` or
    ``get_persistence_context``.
    """

    context_class = PersistenceContext
    database_alias: str | None = None

    def get_persistence_context(self) -> PersistenceContext:
        if getattr(self, '_persistence_context', None) is None:
            self._persistence_context = self.context_class(using=self.database_alias)
        return self._persistence_context
