# users/views.py
"""
USER AUTH VIEWS

Identity is Django auth + SimpleJWT bearer tokens:
- signup / login / refresh are anonymous
- forgot-password / reset-password drive Django's password reset tokens
- me / profile require a bearer token

Security hardening:
- Targeted "auth" throttle scope on every anonymous credential endpoint
- forgot-password always answers 200 so account existence is not leaked
- Signup always creates role "user"
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import PasswordResetForm
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import (
    ForgotPasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    ResetPasswordSerializer,
    SignupSerializer,
    UserSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


# ---------------- THROTTLES + ANONYMOUS BASE ----------------
class _AnonymousAuthView(generics.GenericAPIView):
    """
    Credential endpoints: no authenticators, "auth" throttle scope.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"

    def get_authenticate_header(self, request):
        # Keeps bad-credential responses at 401 without any authenticator configured.
        return 'Bearer realm="api"'


# ---------------- SIGNUP ----------------
class SignupView(_AnonymousAuthView):
    serializer_class = SignupSerializer

    @extend_schema(responses={201: UserSerializer}, description="Create a shopper account")
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info("User signed up", extra={"user_id": str(user.id)})

        return Response(
            {
                "message": "User created successfully",
                "data": UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


# ---------------- LOGIN (JWT + EMAIL) ----------------
class LoginView(_AnonymousAuthView):
    serializer_class = LoginSerializer

    @extend_schema(description="Exchange email + password for access/refresh tokens")
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        user = User.objects.filter(email__iexact=email).first()

        if user is None or not user.check_password(password):
            raise AuthenticationFailed("Invalid email or password")

        if not user.is_active:
            raise AuthenticationFailed("User account is disabled")

        refresh = RefreshToken.for_user(user)

        return Response(
            {
                "data": {
                    "access": str(refresh.access_token),
                    "refresh": str(refresh),
                    "user": UserSerializer(user).data,
                }
            },
            status=status.HTTP_200_OK,
        )


# ---------------- FORGOT / RESET PASSWORD ----------------
class ForgotPasswordView(_AnonymousAuthView):
    serializer_class = ForgotPasswordSerializer

    @extend_schema(description="Email a password reset link (always 200)")
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        form = PasswordResetForm(data={"email": serializer.validated_data["email"]})
        if form.is_valid():
            form.save(
                request=request,
                subject_template_name="users/password_reset_subject.txt",
                email_template_name="users/password_reset_email.txt",
                from_email=settings.DEFAULT_FROM_EMAIL,
                extra_email_context={"frontend_base_url": settings.FRONTEND_BASE_URL.rstrip("/")},
            )

        return Response(
            {"message": "If an account exists for this email, a reset link has been sent"},
            status=status.HTTP_200_OK,
        )


class ResetPasswordView(_AnonymousAuthView):
    serializer_class = ResetPasswordSerializer

    @extend_schema(description="Set a new password from a reset link (uid + token)")
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info("Password reset completed", extra={"user_id": str(user.id)})

        return Response({"message": "Password has been reset"}, status=status.HTTP_200_OK)


# ---------------- CURRENT USER ----------------
class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, description="Current profile")
    def get(self, request):
        return Response({"data": UserSerializer(request.user).data})


class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer})
    def put(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return Response(
            {"data": UserSerializer(user).data, "message": "Profile updated successfully"}
        )

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer})
    def patch(self, request):
        return self.put(request)
