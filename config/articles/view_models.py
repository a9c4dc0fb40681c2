"""
Request-scoped view models for the article pages.

    - AddArticleViewModel: fields of the add form
    - EditArticleViewModel: fields of the edit form, including the article id

They hold no identity of their own; handlers copy fields between them and
``Article`` entities explicitly.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .models import Article


@dataclass
class AddArticleViewModel:
    title: str = ''
    description: str = ''
    author: str = ''
    created_at: datetime | None = None

    def clear(self) -> None:
        """Blank the user-entered fields so the add form can be reused."""
        self.title = ''
        self.description = ''
        self.author = ''

    def as_initial(self) -> dict[str, Any]:
        return {'title': self.title, 'description': self.description, 'author': self.author}


@dataclass
class EditArticleViewModel:
    id: uuid.UUID
    title: str = ''
    description: str = ''
    author: str = ''
    created_at: datetime | None = None

    @classmethod
    def from_article(cls, article: Article) -> EditArticleViewModel:
        return cls(
            id=article.id,
            title=article.title,
            description=article.description,
            author=article.author,
            created_at=article.created_at,
        )

    def matches(self, article: Article) -> bool:
        """True when every editable field already equals the stored value."""
        return (
            article.title == self.title
            and article.description == self.description
            and article.author == self.author
        )

    def as_initial(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'author': self.author,
        }
