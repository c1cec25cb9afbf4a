from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q


class UsernameOrEmailBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None:
            return None
        usermodel = get_user_model()
        user = (
            usermodel.objects.filter(
                Q(email__iexact=username) | Q(username__iexact=username),
            )
            .order_by("pk")
            .first()
        )
        if user is None:
            # Run the hasher anyway to keep timing uniform
            usermodel().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        return None
