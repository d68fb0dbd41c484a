"""Serializers for login, profile self-service, and account administration."""

from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed

from core.exceptions import Conflict

from .managers import MAX_PASSWORD_BYTES, AccountManager, normalize_account_email, password_too_long
from .models import Account


def _ensure_email_available(email: str, instance: Account | None = None, message: str = "Email already in use") -> str:
    """Normalize ``email`` and raise Conflict if another account holds it."""
    email = normalize_account_email(email)
    qs = Account.objects.filter(email=email)
    if instance is not None:
        qs = qs.exclude(pk=instance.pk)
    if qs.exists():
        raise Conflict(message)
    return email


def _check_password_length(value: str) -> str:
    if password_too_long(value):
        raise serializers.ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class LoginSerializer(serializers.Serializer):
    """Authenticate an account via email/password using bcrypt verification."""

    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        """Authenticate credentials and attach the account to validated_data."""
        email = normalize_account_email(attrs.get("email"))
        account = Account.objects.filter(email=email).first()
        if account is None or not AccountManager.verify_password(account, attrs.get("password")):
            raise AuthenticationFailed("Invalid credentials")

        attrs["account"] = account
        return attrs


class AccountSerializer(serializers.ModelSerializer):
    """Read-only account payload for responses."""

    class Meta:
        model = Account
        fields = ["id", "name", "email", "role", "created_at", "updated_at"]
        read_only_fields = fields


class SessionAccountSerializer(serializers.ModelSerializer):
    """Compact identity returned alongside a freshly issued token."""

    class Meta:
        model = Account
        fields = ["id", "email", "role", "name"]
        read_only_fields = fields


class AccountCreateSerializer(serializers.Serializer):
    """Validate and create an editor account.

    The password is optional; when omitted, a random one is generated by the
    view and returned once to the admin.
    """

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, required=False, allow_blank=False, trim_whitespace=False)
    role = serializers.ChoiceField(choices=Account.Role.choices, required=False, default=Account.Role.USER)

    @staticmethod
    def validate_email(value):
        """Ensure email is unique before creation."""
        return _ensure_email_available(value)

    @staticmethod
    def validate_password(value):
        return _check_password_length(value)

    def create(self, validated_data):
        return Account.objects.create_account(**validated_data)


class AccountUpdateSerializer(serializers.ModelSerializer):
    """Admin edits of name, email and role; only supplied fields change."""

    class Meta:
        model = Account
        fields = ["name", "email", "role"]
        extra_kwargs = {
            "name": {"required": False},
            "email": {"required": False, "validators": []},
            "role": {"required": False},
        }

    def validate_email(self, value):
        return _ensure_email_available(value, self.instance, "Email is already used by another user")


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Self-service edits of the caller's own name and email."""

    class Meta:
        model = Account
        fields = ["name", "email"]
        extra_kwargs = {
            "name": {"required": False},
            "email": {"required": False, "validators": []},
        }

    def validate_email(self, value):
        return _ensure_email_available(value, self.instance, "Email is already in use by another user")


class PasswordChangeSerializer(serializers.Serializer):
    """Verify the current password before accepting a new one."""

    current_password = serializers.CharField(write_only=True, trim_whitespace=False)
    new_password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_current_password(self, value):
        if not AccountManager.verify_password(self.context["account"], value):
            raise serializers.ValidationError("Current password is incorrect")
        return value

    @staticmethod
    def validate_new_password(value):
        return _check_password_length(value)


__all__ = [
    "LoginSerializer",
    "AccountSerializer",
    "SessionAccountSerializer",
    "AccountCreateSerializer",
    "AccountUpdateSerializer",
    "ProfileUpdateSerializer",
    "PasswordChangeSerializer",
]
