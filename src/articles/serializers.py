"""Serializers for article input and the owner/admin/public projections."""

from rest_framework import serializers

from accounts.models import Account

from .models import Article


class AuthorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ["id", "name", "email"]
        read_only_fields = fields


class PublicAuthorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ["id", "name"]
        read_only_fields = fields


class ArticleSerializer(serializers.ModelSerializer):
    """Full article with its author joined in, for owners and admins."""

    author = AuthorSerializer(read_only=True)

    class Meta:
        model = Article
        fields = [
            "id",
            "title",
            "summary",
            "content",
            "categories",
            "image_url",
            "source",
            "status",
            "author",
            "published_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PublicArticleSerializer(serializers.ModelSerializer):
    """Reader-facing projection; the author's email is not exposed."""

    author = PublicAuthorSerializer(read_only=True)

    class Meta:
        model = Article
        fields = [
            "id",
            "title",
            "summary",
            "content",
            "image_url",
            "categories",
            "source",
            "published_at",
            "created_at",
            "author",
        ]
        read_only_fields = fields


class ArticleWriteSerializer(serializers.Serializer):
    """Shape-check author input; workflow rules live in ``articles.workflow``.

    ``categories`` and ``status`` pass through untouched so the workflow can
    normalize them and raise InvalidCategory / InvalidStatus itself.
    """

    title = serializers.CharField(required=False, allow_blank=True, max_length=255)
    summary = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    content = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    categories = serializers.JSONField(required=False)
    image_url = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2048)
    source = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    status = serializers.JSONField(required=False)


class StatusSerializer(serializers.Serializer):
    status = serializers.JSONField()


__all__ = [
    "ArticleSerializer",
    "PublicArticleSerializer",
    "ArticleWriteSerializer",
    "StatusSerializer",
]
