"""
Per-request persistence context over the Django ORM.

A ``PersistenceContext`` exposes one ``EntitySet`` per entity type
(``articles``, ``users``).  Adds, removes and field changes on entities
loaded through the context are held in memory until ``save()`` commits
them together inside a single ``transaction.atomic()`` block.

Views create one context per request (see ``core.views``), so nothing is
shared between requests except the database itself.

Usage:
    >>> context = PersistenceContext()
    >>> article = context.articles.find(article_id)
    >>> article.title = "New title"
    >>> context.save()
    1
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import DatabaseError, models, transaction

logger = logging.getLogger('core')


def _snapshot(entity: models.Model) -> dict[str, Any]:
    return {
        field.attname: getattr(entity, field.attname)
        for field in entity._meta.concrete_fields
        if not field.primary_key
    }


class EntitySet:
    """One named collection of a ``PersistenceContext`` (find/add/remove/all)."""

    def __init__(self, model: type[models.Model], context: PersistenceContext):
        self.model = model
        self._context = context

    @property
    def _queryset(self) -> models.QuerySet:
        return self.model._default_manager.using(self._context.using)

    def find(self, pk: Any) -> models.Model | None:
        """
        Return the entity with primary key *pk*, or ``None`` if there is none.

        An entity already loaded by this context is returned as the same
        instance; one pending removal is reported as absent.
        """
        pk = self.model._meta.pk.to_python(pk)
        key = (self.model, pk)

        if key in self._context._removed:
            return None
        if key in self._context._tracked:
            return self._context._tracked[key][0]

        try:
            entity = self._queryset.get(pk=pk)
        except self.model.DoesNotExist:
            logger.debug("%s %s not found", self.model.__name__, pk)
            return None

        self._context._track(entity)
        return entity

    def all(self) -> list[models.Model]:
        """Load every committed row of this collection; no filter, order or paging."""
        entities = []
        for entity in self._queryset.all():
            key = (self.model, entity.pk)
            if key in self._context._removed:
                continue
            if key in self._context._tracked:
                entities.append(self._context._tracked[key][0])
            else:
                self._context._track(entity)
                entities.append(entity)
        return entities

    def add(self, entity: models.Model) -> None:
        """Schedule *entity* for insertion on the next ``save()``."""
        self._check_type(entity)
        if entity not in self._context._added:
            self._context._added.append(entity)

    def remove(self, entity: models.Model) -> None:
        """Schedule *entity* for deletion on the next ``save()``."""
        self._check_type(entity)
        if entity in self._context._added:
            self._context._added.remove(entity)
            return

        key = (self.model, entity.pk)
        self._context._tracked.pop(key, None)
        self._context._removed[key] = entity

    def _check_type(self, entity: models.Model) -> None:
        if not isinstance(entity, self.model):
            raise TypeError(
                f"{type(entity).__name__} cannot be stored in the {self.model.__name__} collection"
            )


class PersistenceContext:
    """
    Unit of work over the ``articles`` and ``users`` tables.

    Args:
        using: database alias (default: ``'default'``).
    """

    def __init__(self, using: str | None = None):
        from accounts.models import User
        from articles.models import Article

        self.using = using
        self._added: list[models.Model] = []
        self._removed: dict[tuple[type[models.Model], Any], models.Model] = {}
        self._tracked: dict[tuple[type[models.Model], Any], tuple[models.Model, dict[str, Any]]] = {}

        self.articles = EntitySet(Article, self)
        self.users = EntitySet(User, self)

    def _track(self, entity: models.Model) -> None:
        self._tracked[(type(entity), entity.pk)] = (entity, _snapshot(entity))

    def _changed_fields(self, entity: models.Model, snapshot: dict[str, Any]) -> list[str]:
        current = _snapshot(entity)
        return [name for name, value in current.items() if snapshot.get(name) != value]

    @property
    def has_changes(self) -> bool:
        if self._added or self._removed:
            return True
        return any(self._changed_fields(entity, snap) for entity, snap in self._tracked.values())

    def save(self) -> int:
        """
        Commit every pending add, mutation and removal atomically.

        On failure the pending adds, removals and unsaved field changes are
        kept, so calling ``save()`` again retries all of them.  Fix or
        ``remove()`` the offending entity first, or discard the context.

        Returns:
            Number of rows written.

        Raises:
            django.db.DatabaseError: propagated unchanged after logging;
                nothing from this call is committed.
        """
        pending_updates = []
        for entity, snapshot in self._tracked.values():
            changed = self._changed_fields(entity, snapshot)
            if changed:
                pending_updates.append((entity, changed))

        if not (self._added or self._removed or pending_updates):
            return 0

        written = 0
        try:
            with transaction.atomic(using=self.using):
                for entity in self._added:
                    entity.save(using=self.using, force_insert=True)
                    written += 1
                for entity, changed in pending_updates:
                    entity.save(using=self.using, update_fields=changed)
                    written += 1
                for entity in self._removed.values():
                    entity.delete(using=self.using)
                    written += 1
        except DatabaseError:
            logger.exception(
                "Failed to save changes (%d added, %d updated, %d removed)",
                len(self._added), len(pending_updates), len(self._removed),
            )
            raise

        for entity in self._added:
            self._track(entity)
        for entity, _ in pending_updates:
            self._track(entity)
        self._added.clear()
        self._removed.clear()

        logger.debug("Saved %d change(s)", written)
        return written
