"""
Tests for registration.

Covers the User model's password helpers and the registration page:
successful sign-up, salted hashing, validation and duplicate usernames.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse

from .models import User


class UserModelTest(TestCase):
    """Tests for the User model."""

    def test_raw_password_is_not_stored(self):
        user = User(username="jane")
        user.set_password("s3cret")
        self.assertNotEqual(user.password_hash, "s3cret")
        self.assertNotIn("s3cret", user.password_hash)

    def test_check_password(self):
        user = User(username="jane")
        user.set_password("s3cret")
        self.assertTrue(user.check_password("s3cret"))
        self.assertFalse(user.check_password("wrong"))

    def test_same_password_gets_different_hashes(self):
        """Hashes are salted per user."""
        a = User(username="a")
        b = User(username="b")
        a.set_password("shared")
        b.set_password("shared")
        self.assertNotEqual(a.password_hash, b.password_hash)

    def test_unique_username_constraint(self):
        User.objects.create(username="taken", password_hash="x")
        with self.assertRaises(Exception):
            User.objects.create(username="taken", password_hash="y")

    def test_str_representation(self):
        self.assertEqual(str(User(username="jane")), "jane")


class RegistrationViewTest(TestCase):
    """Tests for the registration page."""

    def setUp(self):
        self.url = reverse('accounts:register')

    def test_get_renders_form(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertIn('form', response.context)

    @override_settings(LOGIN_URL='/login/')
    def test_register_redirects_to_login(self):
        response = self.client.post(self.url, {'username': "jane", 'password': "s3cret"})
        self.assertRedirects(response, '/login/', fetch_redirect_response=False)

    def test_register_stores_hash_only(self):
        self.client.post(self.url, {'username': "jane", 'password': "s3cret"})

        user = User.objects.get(username="jane")
        self.assertNotEqual(user.password_hash, "s3cret")
        self.assertTrue(user.check_password("s3cret"))
        self.assertFalse(user.check_password("s3cret!"))

    def test_register_does_not_create_auth_user(self):
        self.client.post(self.url, {'username': "jane", 'password': "s3cret"})
        self.assertFalse(get_user_model().objects.exists())

    def test_invalid_username_rerenders_form(self):
        response = self.client.post(self.url, {'username': "no spaces!", 'password': "s3cret"})
        self.assertEqual(response.status_code, 200)
        self.assertIn('username', response.context['form'].errors)
        self.assertFalse(User.objects.exists())

    def test_username_is_not_trimmed(self):
        response = self.client.post(self.url, {'username': " jane ", 'password': "s3cret"})
        self.assertEqual(response.status_code, 200)
        self.assertIn('username', response.context['form'].errors)
        self.assertFalse(User.objects.exists())

    def test_missing_password_rerenders_form(self):
        response = self.client.post(self.url, {'username': "jane"})
        self.assertEqual(response.status_code, 200)
        self.assertIn('password', response.context['form'].errors)
        self.assertFalse(User.objects.exists())

    def test_duplicate_username_rejected(self):
        self.client.post(self.url, {'username': "jane", 'password': "first"})
        response = self.client.post(self.url, {'username': "jane", 'password': "second"})

        self.assertEqual(response.status_code, 200)
        self.assertIn('username', response.context['form'].errors)
        self.assertEqual(User.objects.filter(username="jane").count(), 1)
        self.assertTrue(User.objects.get(username="jane").check_password("first"))
