"""
Page handlers for articles: add, edit/delete and list.

Each handler binds its form, maps it to a view model, reads or writes
``Article`` entities through the request's persistence context and sets a
status message for the template (``message``).  A missing article on
update or delete is a silent no-op; database errors are not caught here.
"""

from __future__ import annotations

import logging

from django.contrib import messages
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views import View

from core.views import PersistenceContextMixin

from .forms import AddArticleForm, DeleteArticleForm, EditArticleForm
from .models import Article
from .view_models import EditArticleViewModel

logger = logging.getLogger('articles')


class ArticleAddView(PersistenceContextMixin, View):
    template_name = 'articles/add.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        return self.render_page(request, AddArticleForm())

    def post(self, request: HttpRequest) -> HttpResponse:
        form = AddArticleForm(request.POST)
        if not form.is_valid():
            return self.render_page(request, form)

        add_request = form.to_view_model()
        add_request.created_at = timezone.now()

        article = Article(
            title=add_request.title,
            description=add_request.description,
            author=add_request.author,
            created_at=add_request.created_at,
        )
        context = self.get_persistence_context()
        context.articles.add(article)
        context.save()
        logger.info("Created article %s (%r)", article.pk, article.title)

        add_request.clear()
        return self.render_page(
            request,
            AddArticleForm(initial=add_request.as_initial()),
            message="Article created successfully.",
        )

    def render_page(self, request, form, message=None):
        return render(request, self.template_name, {'form': form, 'message': message})


class ArticleEditView(PersistenceContextMixin, View):
    """
    Load, update or delete one article.

    POST carries ``action=delete`` for deletion; anything else is an edit.
    Submitting values identical to the stored ones commits nothing and
    reports "Values are the same".
    """

    template_name = 'articles/edit.html'

    def get(self, request: HttpRequest, pk) -> HttpResponse:
        article = self.get_persistence_context().articles.find(pk)
        if article is None:
            return self.render_page(request, form=None)

        view_model = EditArticleViewModel.from_article(article)
        return self.render_page(
            request,
            form=EditArticleForm(initial=view_model.as_initial()),
            view_model=view_model,
        )

    def post(self, request: HttpRequest, pk) -> HttpResponse:
        if request.POST.get('action') == 'delete':
            return self.delete_article(request)
        return self.update_article(request)

    def update_article(self, request: HttpRequest) -> HttpResponse:
        form = EditArticleForm(request.POST)
        if not form.is_valid():
            return self.render_page(request, form)

        edit_request = form.to_view_model()
        context = self.get_persistence_context()
        article = context.articles.find(edit_request.id)
        if article is None:
            logger.debug("Edit skipped: article %s does not exist", edit_request.id)
            return self.render_page(request, form)

        if edit_request.matches(article):
            return self.render_page(request, form, view_model=edit_request, message="Values are the same")

        article.title = edit_request.title
        article.description = edit_request.description
        article.author = edit_request.author
        context.save()
        logger.info("Updated article %s", article.pk)

        return self.render_page(
            request,
            form,
            view_model=EditArticleViewModel.from_article(article),
            message=f"Article {article.title} updated successfully",
        )

    def delete_article(self, request: HttpRequest) -> HttpResponse:
        form = DeleteArticleForm(request.POST)
        if not form.is_valid():
            return self.render_page(request, EditArticleForm(request.POST))

        context = self.get_persistence_context()
        article = context.articles.find(form.article_id)
        if article is None:
            logger.debug("Delete skipped: article %s does not exist", form.article_id)
            return self.render_page(request, EditArticleForm(request.POST))

        title = article.title
        article_id = article.pk
        context.articles.remove(article)
        context.save()
        logger.info("Deleted article %s", article_id)

        messages.success(request, f"Article {title} was deleted")
        return redirect('articles:list')

    def render_page(self, request, form, view_model=None, message=None):
        return render(
            request,
            self.template_name,
            {'form': form, 'view_model': view_model, 'message': message},
        )


class ArticleListView(PersistenceContextMixin, View):
    template_name = 'articles/list.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        articles = self.get_persistence_context().articles.all()
        return render(request, self.template_name, {'articles': articles})
