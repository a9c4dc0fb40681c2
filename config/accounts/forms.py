"""
Registration form.

Usernames are 3-20 characters of letters, digits, ``_`` or ``-``;
passwords are 3-128 characters.  A username already taken is rejected
here so the form re-renders with an error instead of failing on insert.
"""

from __future__ import annotations

from django import forms
from django.core.validators import RegexValidator

from .models import User
from .view_models import RegistrationViewModel

username_validator = RegexValidator(
    regex=r'^[a-zA-Z0-9_-]{3,20}$',
    message="This username is invalid.",
)


class RegistrationForm(forms.Form):
    username = forms.CharField(max_length=20, strip=False, validators=[username_validator])
    password = forms.CharField(
        min_length=3,
        max_length=128,
        strip=False,
        widget=forms.PasswordInput,
    )

    def clean_username(self) -> str:
        username = self.cleaned_data['username']
        if User.objects.filter(username=username).exists():
            raise forms.ValidationError("This username is already taken.")
        return username

    def to_view_model(self) -> RegistrationViewModel:
        data = self.cleaned_data
        return RegistrationViewModel(username=data['username'], password=data['password'])
