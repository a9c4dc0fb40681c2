"""
Models for the article management site.

    - Article: one article created, edited and deleted through the article pages
"""

import uuid

from django.db import models
from django.utils import timezone


class Article(models.Model):
    """
    A single persisted article.

    ``author`` is free-text metadata, not a reference to ``accounts.User``.
    ``created_at`` is stamped by the server when the article is added and is
    never taken from form input.

    Example:
        >>> article = Article(
        ...     title="Release notes",
        ...     description="What changed this week",
        ...     author="Jane",
        ...     created_at=timezone.now(),
        ... )
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200, verbose_name="Title")
    description = models.TextField(verbose_name="Description")
    author = models.CharField(max_length=200, blank=True, default='', verbose_name="Author")
    created_at = models.DateTimeField(default=timezone.now, editable=False, verbose_name="Created At")

    class Meta:
        verbose_name = "Article"
        verbose_name_plural = "Articles"

    def __str__(self) -> str:
        return self.title
