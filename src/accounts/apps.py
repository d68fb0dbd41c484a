"""App configuration for editor and admin accounts."""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Accounts app holds the Account model, login, and account administration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
