"""
Tests for the article pages.

Covers:
1. Article model defaults
2. Add page: stored fields, server-side timestamp, validation
3. Edit page: load, update, "unchanged values", missing ids
4. Delete: redirect, flash message, missing ids
5. List page: exact committed set
6. End-to-end add → edit → delete scenario
"""

from __future__ import annotations

import uuid
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from core.context import PersistenceContext

from .models import Article
from .view_models import AddArticleViewModel, EditArticleViewModel


def make_article(**overrides) -> Article:
    fields = {
        'title': "Original title",
        'description': "Original description",
        'author': "Original author",
    }
    fields.update(overrides)
    return Article.objects.create(**fields)


# =============================================================================
# Model / View Model Tests
# =============================================================================


class ArticleModelTest(TestCase):
    """Tests for the Article model."""

    def test_defaults(self):
        article = Article.objects.create(title="T", description="D")
        self.assertIsInstance(article.id, uuid.UUID)
        self.assertEqual(article.author, '')
        self.assertIsNotNone(article.created_at)

    def test_ids_are_unique(self):
        first = make_article()
        second = make_article()
        self.assertNotEqual(first.id, second.id)

    def test_str_representation(self):
        self.assertEqual(str(Article(title="Hello")), "Hello")


class ViewModelTest(TestCase):

    def test_add_view_model_clear(self):
        vm = AddArticleViewModel(title="A", description="B", author="C")
        vm.clear()
        self.assertEqual(vm.as_initial(), {'title': '', 'description': '', 'author': ''})

    def test_edit_view_model_from_article(self):
        article = make_article()
        vm = EditArticleViewModel.from_article(article)
        self.assertEqual(vm.id, article.id)
        self.assertEqual(vm.created_at, article.created_at)
        self.assertTrue(vm.matches(article))

        vm.description = "changed"
        self.assertFalse(vm.matches(article))


# =============================================================================
# Add Page Tests
# =============================================================================


class ArticleAddViewTest(TestCase):
    """Tests for the add page."""

    def setUp(self):
        self.url = reverse('articles:add')

    def test_get_renders_empty_form(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context['message'])

    def test_post_stores_submitted_fields(self):
        before = timezone.now()
        response = self.client.post(self.url, {
            'title': "A",
            'description': "B",
            'author': "C",
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['message'], "Article created successfully.")

        article = Article.objects.get()
        self.assertEqual(article.title, "A")
        self.assertEqual(article.description, "B")
        self.assertEqual(article.author, "C")
        self.assertGreaterEqual(article.created_at, before)

    def test_author_is_optional(self):
        self.client.post(self.url, {'title': "A", 'description': "B"})
        self.assertEqual(Article.objects.get().author, '')

    def test_client_supplied_timestamp_is_ignored(self):
        """created_at always comes from the server clock."""
        before = timezone.now()
        self.client.post(self.url, {
            'title': "A",
            'description': "B",
            'created_at': "2001-01-01T00:00:00Z",
        })
        self.assertGreaterEqual(Article.objects.get().created_at, before)

    def test_form_is_cleared_after_success(self):
        response = self.client.post(self.url, {'title': "A", 'description': "B", 'author': "C"})
        form = response.context['form']
        self.assertFalse(form.is_bound)
        self.assertEqual(form.initial['title'], '')
        self.assertEqual(form.initial['author'], '')

    def test_missing_title_stores_nothing(self):
        response = self.client.post(self.url, {'description': "B"})
        self.assertEqual(response.status_code, 200)
        self.assertIn('title', response.context['form'].errors)
        self.assertIsNone(response.context['message'])
        self.assertFalse(Article.objects.exists())

    def test_whitespace_is_stored_as_submitted(self):
        self.client.post(self.url, {'title': "  A ", 'description': "B\n", 'author': " C"})
        article = Article.objects.get()
        self.assertEqual(
            (article.title, article.description, article.author),
            ("  A ", "B\n", " C"),
        )


# =============================================================================
# Edit Page Tests
# =============================================================================


class ArticleEditViewTest(TestCase):
    """Tests for loading and updating an article."""

    def setUp(self):
        self.article = make_article()
        self.url = reverse('articles:edit', args=[self.article.id])

    def edit_data(self, **overrides):
        data = {
            'id': str(self.article.id),
            'title': self.article.title,
            'description': self.article.description,
            'author': self.article.author,
            'action': 'edit',
        }
        data.update(overrides)
        return data

    def test_get_loads_article(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        view_model = response.context['view_model']
        self.assertEqual(view_model.id, self.article.id)
        self.assertEqual(view_model.title, "Original title")
        self.assertEqual(response.context['form'].initial['description'], "Original description")

    def test_get_missing_article_renders_empty_page(self):
        response = self.client.get(reverse('articles:edit', args=[uuid.uuid4()]))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context['form'])
        self.assertIsNone(response.context['view_model'])
        self.assertIsNone(response.context['message'])

    def test_malformed_id_is_not_found(self):
        response = self.client.get('/articles/not-a-uuid/edit/')
        self.assertEqual(response.status_code, 404)

    def test_update_overwrites_fields(self):
        response = self.client.post(self.url, self.edit_data(
            title="A2",
            description="B2",
            author="C2",
        ))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['message'], "Article A2 updated successfully")

        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "A2")
        self.assertEqual(self.article.description, "B2")
        self.assertEqual(self.article.author, "C2")

    def test_update_keeps_created_at(self):
        created_at = self.article.created_at
        self.client.post(self.url, self.edit_data(title="A2"))
        self.article.refresh_from_db()
        self.assertEqual(self.article.created_at, created_at)

    def test_update_title_only(self):
        self.client.post(self.url, self.edit_data(title="A2"))
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "A2")
        self.assertEqual(self.article.description, "Original description")

    def test_unchanged_values_do_not_commit(self):
        with patch.object(PersistenceContext, 'save') as mock_save:
            response = self.client.post(self.url, self.edit_data())

        mock_save.assert_not_called()
        self.assertEqual(response.context['message'], "Values are the same")

    def test_unchanged_values_leave_row_equal_to_submission(self):
        """
        Whether an identical submission is skipped or rewritten, the stored
        row must equal what was submitted.
        """
        self.client.post(self.url, self.edit_data())
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "Original title")
        self.assertEqual(self.article.description, "Original description")
        self.assertEqual(self.article.author, "Original author")

    def test_update_missing_article_is_silent_noop(self):
        missing = uuid.uuid4()
        response = self.client.post(
            reverse('articles:edit', args=[missing]),
            self.edit_data(id=str(missing), title="Ghost"),
        )

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context['message'])
        self.assertFalse(Article.objects.filter(title="Ghost").exists())
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "Original title")

    def test_update_with_invalid_form_changes_nothing(self):
        response = self.client.post(self.url, self.edit_data(title=""))
        self.assertEqual(response.status_code, 200)
        self.assertIn('title', response.context['form'].errors)
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "Original title")

    def test_unknown_action_is_treated_as_edit(self):
        self.client.post(self.url, self.edit_data(title="A2", action='bogus'))
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "A2")

    def test_trailing_whitespace_counts_as_a_change(self):
        response = self.client.post(self.url, self.edit_data(title="Original title "))
        self.assertEqual(response.context['message'], "Article Original title  updated successfully")
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "Original title ")

    def test_update_targets_hidden_id_not_url(self):
        """The submitted id selects the article; the URL only chooses the page."""
        other = make_article(title="Other")
        self.client.post(self.url, self.edit_data(id=str(other.id), title="Changed via form id"))

        other.refresh_from_db()
        self.article.refresh_from_db()
        self.assertEqual(other.title, "Changed via form id")
        self.assertEqual(self.article.title, "Original title")


# =============================================================================
# Delete Tests
# =============================================================================


class ArticleDeleteTest(TestCase):
    """Tests for the delete action on the edit page."""

    def setUp(self):
        self.article = make_article(title="Doomed")
        self.url = reverse('articles:edit', args=[self.article.id])

    def test_delete_existing_redirects_to_list(self):
        response = self.client.post(self.url, {'id': str(self.article.id), 'action': 'delete'})
        self.assertRedirects(response, reverse('articles:list'))
        self.assertFalse(Article.objects.filter(id=self.article.id).exists())

    def test_delete_flashes_message_on_list(self):
        response = self.client.post(
            self.url,
            {'id': str(self.article.id), 'action': 'delete'},
            follow=True,
        )
        flashed = [str(m) for m in response.context['messages']]
        self.assertEqual(flashed, ["Article Doomed was deleted"])

    def test_delete_missing_article_rerenders_page(self):
        other = make_article(title="Survivor")
        missing = uuid.uuid4()
        response = self.client.post(
            reverse('articles:edit', args=[missing]),
            {'id': str(missing), 'action': 'delete'},
        )

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.context['message'])
        self.assertEqual(Article.objects.count(), 2)
        self.assertTrue(Article.objects.filter(id=other.id).exists())

    def test_delete_with_malformed_hidden_id_deletes_nothing(self):
        response = self.client.post(self.url, {'id': "garbage", 'action': 'delete'})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(Article.objects.filter(id=self.article.id).exists())

    def test_delete_targets_hidden_id_not_url(self):
        other = make_article(title="Other")
        response = self.client.post(self.url, {'id': str(other.id), 'action': 'delete'})

        self.assertRedirects(response, reverse('articles:list'))
        self.assertFalse(Article.objects.filter(id=other.id).exists())
        self.assertTrue(Article.objects.filter(id=self.article.id).exists())


# =============================================================================
# List Page Tests
# =============================================================================


class ArticleListViewTest(TestCase):
    """Tests for the list page."""

    def setUp(self):
        self.url = reverse('articles:list')

    def test_empty_list(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['articles'], [])

    def test_lists_exactly_committed_articles(self):
        created = {make_article(title=f"Article {i}").id for i in range(5)}
        response = self.client.get(self.url)

        listed = [article.id for article in response.context['articles']]
        self.assertEqual(len(listed), len(created))
        self.assertEqual(set(listed), created)

    def test_home_redirects_to_list(self):
        response = self.client.get('/')
        self.assertRedirects(response, self.url)


# =============================================================================
# End-to-end Scenario
# =============================================================================


class ArticleLifecycleTest(TestCase):
    """Add → edit → delete, checking the list page after every step."""

    def listed(self):
        return self.client.get(reverse('articles:list')).context['articles']

    def test_add_edit_delete(self):
        self.client.post(reverse('articles:add'), {'title': "A", 'description': "B", 'author': "C"})
        rows = self.listed()
        self.assertEqual(len(rows), 1)
        row = rows[0]
        self.assertEqual((row.title, row.description, row.author), ("A", "B", "C"))
        self.assertIsNotNone(row.created_at)

        edit_url = reverse('articles:edit', args=[row.id])
        self.client.post(edit_url, {
            'id': str(row.id),
            'title': "A2",
            'description': "B",
            'author': "C",
            'action': 'edit',
        })
        self.assertEqual(self.listed()[0].title, "A2")

        missing = uuid.uuid4()
        self.client.post(reverse('articles:edit', args=[missing]), {
            'id': str(missing),
            'title': "X",
            'description': "Y",
            'action': 'edit',
        })
        self.assertEqual([a.title for a in self.listed()], ["A2"])

        self.client.post(edit_url, {'id': str(row.id), 'action': 'delete'})
        self.assertNotIn(row.id, [a.id for a in self.listed()])


# =============================================================================
# Admin
# =============================================================================


class ArticleAdminTest(TestCase):

    def setUp(self):
        admin_user = get_user_model().objects.create_superuser(
            username='admin', email='admin@example.com', password='admin-pass',
        )
        self.client.force_login(admin_user)

    def test_changelist_shows_articles(self):
        make_article(title="Listed in admin")
        response = self.client.get(reverse('admin:articles_article_changelist'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Listed in admin")

    def test_change_page_loads(self):
        article = make_article()
        response = self.client.get(reverse('admin:articles_article_change', args=[article.id]))
        self.assertEqual(response.status_code, 200)
