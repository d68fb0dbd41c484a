"""Article model carrying the draft -> in_review -> published workflow fields."""

import uuid

from django.conf import settings
from django.db import models

CATEGORIES = (
    "latest",
    "business",
    "sports",
    "entertainment",
    "political",
    "international",
    "tech",
    "automobile",
    "law",
    "other",
)
DEFAULT_CATEGORY = "latest"


def default_categories() -> list[str]:
    return [DEFAULT_CATEGORY]


class Article(models.Model):
    """News article owned by its author account."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        IN_REVIEW = "in_review", "In review"
        PUBLISHED = "published", "Published"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    summary = models.TextField(blank=True, default="")
    content = models.TextField()
    # Ordered, de-duplicated tags from CATEGORIES.
    categories = models.JSONField(default=default_categories)
    image_url = models.CharField(max_length=2048, blank=True, default="")
    source = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="articles",
    )
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title


__all__ = ["Article", "CATEGORIES", "DEFAULT_CATEGORY"]
