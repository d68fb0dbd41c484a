"""Routing for the author, admin, and public article views.

Mounted by ``core.urls`` under ``api/editor/``, ``api/admin/`` and
``api/public/`` respectively.
"""

from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    AdminArticleViewSet,
    AdminOverviewView,
    EditorArticleViewSet,
    EditorOverviewView,
    PublicArticleViewSet,
)

editor_router = SimpleRouter()
editor_router.register(r"articles", EditorArticleViewSet, basename="editor-article")

admin_router = SimpleRouter()
admin_router.register(r"articles", AdminArticleViewSet, basename="admin-article")

public_router = SimpleRouter()
public_router.register(r"articles", PublicArticleViewSet, basename="public-article")

editor_patterns = editor_router.urls + [
    path("overview/", EditorOverviewView.as_view(), name="editor-overview"),
]

admin_patterns = admin_router.urls + [
    path("overview/", AdminOverviewView.as_view(), name="admin-overview"),
]

public_patterns = public_router.urls
