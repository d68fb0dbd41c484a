"""URL patterns for login, profile self-service, and editor administration.

Mounted by ``core.urls`` under ``api/auth/``, ``api/editor/`` and
``api/admin/`` respectively.
"""

from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import ChangePasswordView, EditorAdminViewSet, LoginView, LogoutView, MeView

admin_router = SimpleRouter()
admin_router.register(r"editors", EditorAdminViewSet, basename="admin-editor")

auth_patterns = [
    path("login/", LoginView.as_view(), name="auth-login"),
    path("logout/", LogoutView.as_view(), name="auth-logout"),
]

editor_patterns = [
    path("me/", MeView.as_view(), name="editor-me"),
    path("change-password/", ChangePasswordView.as_view(), name="editor-change-password"),
]

admin_patterns = admin_router.urls
