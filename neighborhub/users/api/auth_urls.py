from django.urls import path

from .auth_views import ChangePasswordView
from .auth_views import JWTRefreshView
from .auth_views import JWTVerifyView
from .auth_views import LoginView
from .auth_views import MeView
from .auth_views import RegisterView
from .auth_views import VerifyEmailView

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("jwt/refresh/", JWTRefreshView.as_view(), name="jwt-refresh"),
    path("jwt/verify/", JWTVerifyView.as_view(), name="jwt-verify"),
    path("me/", MeView.as_view(), name="me"),
    path("verify-email/", VerifyEmailView.as_view(), name="verify-email"),
    path("change-password/", ChangePasswordView.as_view(), name="change-password"),
]
