import pytest
from django.contrib.auth import get_user_model

from neighborhub.users.auth_backends import UsernameOrEmailBackend

pytestmark = pytest.mark.django_db
User = get_user_model()


class TestUsernameOrEmailBackend:
    def setup_method(self):
        self.backend = UsernameOrEmailBackend()
        self.password = "Sahm1232!q"  # noqa: S105
        self.user = User.objects.create_user(
            username="dana",
            email="Dana@Example.com",
            password=self.password,
        )

    def test_authenticate_with_username(self):
        user = self.backend.authenticate(None, username="dana", password=self.password)
        assert user == self.user

    def test_authenticate_with_email_is_case_insensitive(self):
        user = self.backend.authenticate(
            None,
            username="dana@example.com",
            password=self.password,
        )
        assert user == self.user

    def test_unknown_login_returns_none(self):
        user = self.backend.authenticate(
            None,
            username="nobody@example.com",
            password=self.password,
        )
        assert user is None

    def test_wrong_password_returns_none(self):
        user = self.backend.authenticate(
            None,
            username="dana",
            password="wrongpass",  # noqa: S106
        )
        assert user is None

    def test_inactive_user_cannot_authenticate(self):
        self.user.is_active = False
        self.user.save()
        user = self.backend.authenticate(None, username="dana", password=self.password)
        assert user is None
