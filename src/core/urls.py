"""Root URL configuration for the Newsroom CMS API."""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

from accounts import urls as account_urls
from articles import urls as article_urls
from core.views import HealthView

urlpatterns = [
    path("api/health/", HealthView.as_view(), name="health"),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/auth/", include(account_urls.auth_patterns)),
    path("api/admin/", include(account_urls.admin_patterns + article_urls.admin_patterns)),
    path("api/editor/", include(account_urls.editor_patterns + article_urls.editor_patterns)),
    path("api/public/", include(article_urls.public_patterns)),
]

handler404 = "core.views.not_found"
handler500 = "core.views.server_error"
