"""Article endpoints for authors, admins, and anonymous readers.

Views only parse input and project output; every rule about who may see or
change an article lives in ``articles.workflow``.
"""

from typing import Any

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.views import APIView

from accounts.permissions import IsAdmin, IsAuthenticatedAccount
from core.response import BaseViewSet, api_response, parse_positive_int

from . import workflow
from .serializers import (
    ArticleSerializer,
    ArticleWriteSerializer,
    PublicArticleSerializer,
    StatusSerializer,
)


class EditorArticleViewSet(BaseViewSet):
    """An author's own articles: list, create, read, and partial update."""

    permission_classes = [IsAuthenticatedAccount]
    not_found_message = workflow.NOT_FOUND_MESSAGE

    def list(self, request):
        params = request.query_params
        articles = workflow.list_for_owner(
            request.user,
            status=params.get("status") or None,
            page=parse_positive_int(params.get("page"), "page"),
            limit=parse_positive_int(params.get("limit"), "limit"),
        )
        return api_response({"articles": ArticleSerializer(articles, many=True).data})

    def create(self, request):
        serializer = ArticleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = workflow.create_article(request.user, serializer.validated_data)
        return api_response(
            {"article": ArticleSerializer(article).data},
            status=status.HTTP_201_CREATED,
            message="Article created successfully",
        )

    def retrieve(self, request, pk=None):
        article = workflow.get_owned_article(request.user, self.get_object_id())
        return api_response({"article": ArticleSerializer(article).data})

    def update(self, request, pk=None):
        """PUT applies only the fields present in the body."""
        article_id = self.get_object_id()
        serializer = ArticleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = workflow.update_article(request.user, article_id, serializer.validated_data)
        return api_response({"article": ArticleSerializer(article).data}, message="Article updated successfully")


class AdminArticleViewSet(BaseViewSet):
    """Cross-owner article listing and status control for admins."""

    permission_classes = [IsAdmin]
    not_found_message = workflow.NOT_FOUND_MESSAGE

    def list(self, request):
        params = request.query_params
        page = parse_positive_int(params.get("page"), "page", default=1)
        limit = parse_positive_int(params.get("limit"), "limit", default=settings.ADMIN_PAGE_SIZE)
        articles, total = workflow.list_for_admin(status=params.get("status") or None, page=page, limit=limit)
        return api_response(
            {
                "articles": ArticleSerializer(articles, many=True).data,
                "total": total,
                "page": page,
                "limit": limit,
            }
        )

    def retrieve(self, request, pk=None):
        article = workflow.get_article(self.get_object_id())
        return api_response({"article": ArticleSerializer(article).data})

    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request, pk=None):
        """Move any article to draft, in_review or published."""
        serializer = StatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = workflow.set_status(request.user, self.get_object_id(), serializer.validated_data["status"])
        return api_response({"article": ArticleSerializer(article).data}, message="Article status updated")


class PublicArticleViewSet(BaseViewSet):
    """Published articles for anonymous readers."""

    permission_classes: list[Any] = []
    not_found_message = workflow.NOT_FOUND_MESSAGE

    def list(self, request):
        params = request.query_params
        articles = workflow.list_published(category=params.get("category"), search=params.get("search"))
        return api_response({"articles": PublicArticleSerializer(articles, many=True).data})

    def retrieve(self, request, pk=None):
        article = workflow.get_published_article(self.get_object_id())
        return api_response({"article": PublicArticleSerializer(article).data})


class AdminOverviewView(APIView):
    permission_classes = [IsAdmin]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Dashboard counts across all editors and articles."""
        return api_response(workflow.admin_counts())


class EditorOverviewView(APIView):
    permission_classes = [IsAuthenticatedAccount]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Dashboard counts for the caller's own articles."""
        return api_response(workflow.owner_counts(request.user))


__all__ = [
    "EditorArticleViewSet",
    "AdminArticleViewSet",
    "PublicArticleViewSet",
    "AdminOverviewView",
    "EditorOverviewView",
]
