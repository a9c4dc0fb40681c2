"""
Tests for the per-request persistence context.

Covers find/add/remove/all on both collections, change tracking and the
atomicity of ``save()``.
"""

from __future__ import annotations

import uuid
from unittest.mock import patch

from django.db import IntegrityError
from django.test import TestCase

from accounts.models import User
from articles.models import Article

from .context import PersistenceContext


class EntitySetTest(TestCase):
    """Tests for the ``articles`` / ``users`` collections."""

    def setUp(self):
        self.article = Article.objects.create(title="Stored", description="Row")
        self.context = PersistenceContext()

    def test_find_existing(self):
        found = self.context.articles.find(self.article.id)
        self.assertEqual(found.title, "Stored")

    def test_find_accepts_string_key(self):
        found = self.context.articles.find(str(self.article.id))
        self.assertEqual(found.id, self.article.id)

    def test_find_missing_returns_none(self):
        self.assertIsNone(self.context.articles.find(uuid.uuid4()))

    def test_find_returns_same_instance(self):
        first = self.context.articles.find(self.article.id)
        second = self.context.articles.find(self.article.id)
        self.assertIs(first, second)

    def test_find_after_remove_returns_none(self):
        found = self.context.articles.find(self.article.id)
        self.context.articles.remove(found)
        self.assertIsNone(self.context.articles.find(self.article.id))

    def test_all_returns_every_row(self):
        other = Article.objects.create(title="Other", description="Row")
        ids = {a.id for a in self.context.articles.all()}
        self.assertEqual(ids, {self.article.id, other.id})

    def test_add_wrong_type_rejected(self):
        with self.assertRaises(TypeError):
            self.context.users.add(Article(title="x", description="y"))


class SaveTest(TestCase):
    """Tests for ``PersistenceContext.save``."""

    def test_add_is_not_written_until_save(self):
        context = PersistenceContext()
        context.articles.add(Article(title="New", description="D"))
        self.assertFalse(Article.objects.exists())

        self.assertEqual(context.save(), 1)
        self.assertEqual(Article.objects.get().title, "New")

    def test_mutation_of_found_entity_is_saved(self):
        article = Article.objects.create(title="Before", description="D")
        context = PersistenceContext()
        context.articles.find(article.id).title = "After"

        self.assertTrue(context.has_changes)
        self.assertEqual(context.save(), 1)
        article.refresh_from_db()
        self.assertEqual(article.title, "After")

    def test_untouched_entities_write_nothing(self):
        article = Article.objects.create(title="Same", description="D")
        context = PersistenceContext()
        context.articles.find(article.id)

        self.assertFalse(context.has_changes)
        with patch.object(Article, 'save') as mock_save:
            self.assertEqual(context.save(), 0)
        mock_save.assert_not_called()

    def test_remove_deletes_on_save(self):
        article = Article.objects.create(title="Gone", description="D")
        context = PersistenceContext()
        context.articles.remove(context.articles.find(article.id))

        self.assertTrue(Article.objects.filter(id=article.id).exists())
        context.save()
        self.assertFalse(Article.objects.filter(id=article.id).exists())

    def test_remove_of_pending_add_cancels_it(self):
        context = PersistenceContext()
        article = Article(title="Never", description="D")
        context.articles.add(article)
        context.articles.remove(article)

        self.assertEqual(context.save(), 0)
        self.assertFalse(Article.objects.exists())

    def test_saved_entity_is_tracked_afterwards(self):
        context = PersistenceContext()
        article = Article(title="First", description="D")
        context.articles.add(article)
        context.save()

        article.title = "Second"
        self.assertEqual(context.save(), 1)
        self.assertEqual(Article.objects.get(id=article.id).title, "Second")

    def test_failed_save_rolls_back_everything(self):
        """A failing insert must not leave the other inserts committed."""
        context = PersistenceContext()
        context.articles.add(Article(title="Kept?", description="D"))
        first = User(username="dup")
        first.set_password("pw1")
        second = User(username="dup")
        second.set_password("pw2")
        context.users.add(first)
        context.users.add(second)

        with self.assertLogs('core', level='ERROR') as logs:
            with self.assertRaises(IntegrityError):
                context.save()

        self.assertIn("Failed to save changes", logs.output[0])
        self.assertFalse(Article.objects.exists())
        self.assertFalse(User.objects.exists())

    def test_failed_save_keeps_pending_changes(self):
        """After a failure the same writes are still pending; removing the culprit lets a retry succeed."""
        context = PersistenceContext()
        article = Article(title="Retried", description="D")
        context.articles.add(article)
        first = User(username="dup")
        first.set_password("pw1")
        second = User(username="dup")
        second.set_password("pw2")
        context.users.add(first)
        context.users.add(second)

        with self.assertLogs('core', level='ERROR'):
            with self.assertRaises(IntegrityError):
                context.save()
        self.assertTrue(context.has_changes)

        context.users.remove(second)
        self.assertEqual(context.save(), 2)
        self.assertTrue(Article.objects.filter(id=article.id).exists())
        self.assertEqual(User.objects.filter(username="dup").count(), 1)
