"""
Forms binding POST data for the article pages.

Fields keep the submitted text as-is (no whitespace trimming).
Each form validates raw input and maps ``cleaned_data`` onto its view model
with ``to_view_model()``; handlers never read ``request.POST`` directly.
"""

from __future__ import annotations

import uuid

from django import forms

from .view_models import AddArticleViewModel, EditArticleViewModel


class AddArticleForm(forms.Form):
    title = forms.CharField(max_length=200, strip=False)
    description = forms.CharField(widget=forms.Textarea, strip=False)
    author = forms.CharField(max_length=200, required=False, strip=False)

    def to_view_model(self) -> AddArticleViewModel:
        data = self.cleaned_data
        return AddArticleViewModel(
            title=data['title'],
            description=data['description'],
            author=data['author'],
        )


class DeleteArticleForm(forms.Form):
    """Only the hidden id is needed to delete."""

    id = forms.UUIDField(widget=forms.HiddenInput)

    @property
    def article_id(self) -> uuid.UUID:
        return self.cleaned_data['id']


class EditArticleForm(DeleteArticleForm):
    title = forms.CharField(max_length=200, strip=False)
    description = forms.CharField(widget=forms.Textarea, strip=False)
    author = forms.CharField(max_length=200, required=False, strip=False)

    def to_view_model(self) -> EditArticleViewModel:
        data = self.cleaned_data
        return EditArticleViewModel(
            id=data['id'],
            title=data['title'],
            description=data['description'],
            author=data['author'],
        )
