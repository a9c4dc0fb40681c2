"""
Models for site registration.

    - User: a registered account holding a salted password hash
"""

from django.contrib.auth.hashers import check_password, make_password
from django.db import models


class User(models.Model):
    """
    A registered user.

    Only the derived hash is stored. ``set_password`` hashes with the first
    entry of ``settings.PASSWORD_HASHERS`` and a fresh random salt, so two
    users with the same password never share a stored value.

    Example:
        >>> user = User(username="jane")
        >>> user.set_password("s3cret")
        >>> user.check_password("s3cret")
        True
    """

    username = models.CharField(max_length=150, unique=True, verbose_name="Username")
    password_hash = models.CharField(max_length=128, verbose_name="Password Hash")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Created At")

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self) -> str:
        return self.username

    def set_password(self, raw_password: str) -> None:
        self.password_hash = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password(raw_password, self.password_hash)
