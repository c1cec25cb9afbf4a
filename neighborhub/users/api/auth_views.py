from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.views import TokenVerifyView

from neighborhub.audit.utils import client_ip
from neighborhub.audit.utils import log_action
from neighborhub.users.models import User

from .serializers import ChangePasswordSerializer
from .serializers import LoginSerializer
from .serializers import RegisterSerializer
from .serializers import UserSerializer


def issue_tokens(user: User) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


@extend_schema(tags=["Authentication"], request=RegisterSerializer)
class RegisterView(APIView):
    """Create an account; the zip code picks the neighborhood."""

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        log_action(
            "register",
            actor=user,
            message=f"email={user.email}",
            target=user,
            ip_address=client_ip(request),
        )
        return Response(
            {
                "message": "User registered successfully",
                **issue_tokens(user),
                "user": UserSerializer(user, context={"request": request}).data,
            },
            status=status.HTTP_201_CREATED,
        )


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class LoginView(TokenObtainPairView):
    serializer_class = LoginSerializer
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class JWTRefreshView(TokenRefreshView):
    pass


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class JWTVerifyView(TokenVerifyView):
    pass


@extend_schema(tags=["Authentication"], responses=UserSerializer)
class MeView(APIView):
    def get(self, request):
        serializer = UserSerializer(request.user, context={"request": request})
        return Response({"user": serializer.data})


@extend_schema(tags=["Authentication"], request=None)
class VerifyEmailView(APIView):
    def post(self, request):
        user = request.user
        user.is_verified = True
        user.verification_method = User.VerificationMethod.EMAIL
        user.save(update_fields=["is_verified", "verification_method", "updated_at"])
        return Response({"message": "Email verified successfully"})


@extend_schema(tags=["Authentication"], request=ChangePasswordSerializer)
class ChangePasswordView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def post(self, request):
        serializer = ChangePasswordSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)
        user = request.user
        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password", "updated_at"])
        log_action(
            "password_changed",
            actor=user,
            target=user,
            ip_address=client_ip(request),
        )
        return Response({"message": "Password changed successfully"})
