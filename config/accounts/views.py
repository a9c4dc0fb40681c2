"""Registration page handler."""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.views import View

from core.views import PersistenceContextMixin

from .forms import RegistrationForm
from .models import User

logger = logging.getLogger('accounts')


class RegistrationView(PersistenceContextMixin, View):
    """
    Create a ``User`` from the registration form and send them to log in.

    Invalid input re-renders the form with its errors.  The password is
    hashed with a per-user salt before it reaches the entity.
    """

    template_name = 'accounts/registration.html'

    def get(self, request: HttpRequest) -> HttpResponse:
        return render(request, self.template_name, {'form': RegistrationForm()})

    def post(self, request: HttpRequest) -> HttpResponse:
        form = RegistrationForm(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {'form': form})

        registration = form.to_view_model()
        user = User(username=registration.username)
        user.set_password(registration.password)

        context = self.get_persistence_context()
        context.users.add(user)
        context.save()
        logger.info("Registered user %s", user.username)

        return redirect(settings.LOGIN_URL)
