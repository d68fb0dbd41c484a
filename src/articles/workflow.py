"""Article publication workflow.

The single authority on what constitutes a valid article mutation and on
which articles a caller may see.

States::

    draft <-> in_review <-> published
      ^_______________________|

Every state may move to every other state. The only side effect of a
transition is that entering ``published`` stamps ``published_at`` the first
time; the stamp is never cleared or replaced afterwards.

Mutations are single-row read-modify-write without version checks, so a
concurrent ``set_status`` and ``update_article`` on the same article resolve
as last-write-wins.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from django.db.models import Count, F, Q, QuerySet, TextField
from django.db.models.functions import Cast
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from accounts.models import Account
from core.exceptions import InvalidCategory, InvalidStatus
from core.response import parse_object_id

from .models import CATEGORIES, DEFAULT_CATEGORY, Article

logger = logging.getLogger(__name__)

STATUSES = frozenset(Article.Status.values)
EDITABLE_FIELDS = ("title", "summary", "content", "image_url", "source")
NOT_FOUND_MESSAGE = "Article not found"


def normalize_categories(value: str | Iterable[str] | None) -> list[str]:
    """Turn raw category input into an ordered, de-duplicated tag list.

    Accepts a sequence of strings, a single comma-separated string, or None.
    Candidates are trimmed, empties dropped, lower-cased and de-duplicated
    keeping the first occurrence. An empty result becomes ``["latest"]``.
    """

    if value is None:
        candidates: list[Any] = []
    elif isinstance(value, str):
        candidates = value.split(",")
    elif isinstance(value, Iterable) and not isinstance(value, Mapping):
        candidates = list(value)
    else:
        raise ValidationError({"categories": "Expected a list of strings or a comma-separated string."})

    tags: list[str] = []
    for candidate in candidates:
        if not isinstance(candidate, str):
            raise ValidationError({"categories": "Each category must be a string."})
        tag = candidate.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)

    return tags or [DEFAULT_CATEGORY]


def validate_categories(tags: Iterable[str]) -> list[str]:
    """Reject any tag outside the category vocabulary."""
    tags = list(tags)
    unknown = [tag for tag in tags if tag not in CATEGORIES]
    if unknown:
        raise InvalidCategory(f"Invalid category: {', '.join(unknown)}")
    return tags


def _clean_categories(value) -> list[str]:
    return validate_categories(normalize_categories(value))


def _validate_status(value: Any) -> str:
    if not isinstance(value, str) or value not in STATUSES:
        raise InvalidStatus("Invalid status value supplied")
    return value


def _apply_status(article: Article, new_status: str) -> None:
    """Move ``article`` to ``new_status``, stamping the first publication."""
    article.status = new_status
    if new_status == Article.Status.PUBLISHED and article.published_at is None:
        article.published_at = timezone.now()


def _require_text(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError({name: "This field may not be blank."})
    return value


def _scoped(queryset: QuerySet, article_id: Any) -> Article:
    """Fetch one article from ``queryset`` or raise NotFound.

    Malformed ids, missing rows and rows outside the caller's scope are all
    reported identically.
    """
    object_id = parse_object_id(article_id)
    if object_id is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    article = queryset.filter(pk=object_id).first()
    if article is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return article


def _with_author(queryset: QuerySet) -> QuerySet:
    # Articles are always projected with their author's name/email.
    return queryset.select_related("author")


def _paginate(queryset: QuerySet, page: int | None, limit: int | None) -> QuerySet:
    if limit is None:
        return queryset
    offset = ((page or 1) - 1) * limit
    return queryset[offset:offset + limit]


# --- mutations -------------------------------------------------------------


def create_article(author: Account, fields: Mapping[str, Any]) -> Article:
    """Create an article owned by ``author``.

    Status defaults to ``draft``; ``published_at`` is set only when the
    article is created directly as ``published``.
    """

    title = _require_text(fields, "title")
    content = _require_text(fields, "content")
    status = fields.get("status")
    status = Article.Status.DRAFT if status in (None, "") else _validate_status(status)

    article = Article(
        author=author,
        title=title,
        content=content,
        summary=fields.get("summary") or "",
        image_url=fields.get("image_url") or "",
        source=fields.get("source") or "",
        categories=_clean_categories(fields.get("categories")),
    )
    _apply_status(article, status)
    article.save()
    logger.info("Article %s created by %s as %s", article.pk, author.pk, article.status)
    return article


def update_article(caller: Account, article_id: Any, fields: Mapping[str, Any]) -> Article:
    """Apply a partial update to one of the caller's own articles.

    Only keys present in ``fields`` are applied; present-but-empty values
    overwrite. Articles owned by anyone else are reported as NotFound.
    """

    article = get_owned_article(caller, article_id)

    for name in EDITABLE_FIELDS:
        if name not in fields:
            continue
        if name in ("title", "content"):
            setattr(article, name, _require_text(fields, name))
        else:
            setattr(article, name, fields[name] or "")

    if "categories" in fields:
        article.categories = _clean_categories(fields["categories"])

    if "status" in fields:
        previous = article.status
        _apply_status(article, _validate_status(fields["status"]))
        if previous != article.status:
            logger.info("Article %s moved %s -> %s by its author", article.pk, previous, article.status)

    article.save()
    return article


def set_status(caller: Account, article_id: Any, new_status: Any) -> Article:
    """Admin-only status transition on any article, regardless of owner."""

    if not getattr(caller, "is_admin", False):
        raise PermissionDenied("Admin access only")
    _validate_status(new_status)
    article = get_article(article_id)

    previous = article.status
    _apply_status(article, new_status)
    article.save(update_fields=["status", "published_at", "updated_at"])
    logger.info("Article %s moved %s -> %s by admin %s", article.pk, previous, article.status, caller.pk)
    return article


# --- single-article lookups -----------------------------------------------


def get_owned_article(caller: Account, article_id: Any) -> Article:
    return _scoped(_with_author(Article.objects.filter(author=caller)), article_id)


def get_article(article_id: Any) -> Article:
    """Admin lookup across all owners."""
    return _scoped(_with_author(Article.objects.all()), article_id)


def get_published_article(article_id: Any) -> Article:
    return _scoped(_with_author(Article.objects.filter(status=Article.Status.PUBLISHED)), article_id)


# --- listings ---------------------------------------------------------------


def list_for_owner(
    caller: Account,
    status: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> QuerySet:
    """The caller's own articles, most recently updated first."""

    queryset = Article.objects.filter(author=caller)
    if status:
        queryset = queryset.filter(status=status)
    return _paginate(_with_author(queryset).order_by("-updated_at"), page, limit)


def list_for_admin(status: str | None = None, page: int = 1, limit: int = 20) -> tuple[list[Article], int]:
    """Every article, most recently updated first, with the unpaginated total."""

    queryset = Article.objects.all()
    if status:
        queryset = queryset.filter(status=status)
    total = queryset.count()
    articles = list(_paginate(_with_author(queryset).order_by("-updated_at"), page, limit))
    return articles, total


def list_published(category: str | None = None, search: str | None = None) -> QuerySet:
    """Published articles for anonymous readers.

    ``category`` matches any tag case-insensitively; ``search`` is a
    case-insensitive substring match on the title only.
    """

    queryset = Article.objects.filter(status=Article.Status.PUBLISHED)

    if category:
        tag = category.strip().lower()
        if tag not in CATEGORIES:
            return Article.objects.none()
        # Tags are stored lower-cased, so a quoted match on the JSON text is exact.
        queryset = queryset.annotate(categories_text=Cast("categories", TextField())).filter(
            categories_text__contains=f'"{tag}"'
        )

    if search:
        queryset = queryset.filter(title__icontains=search)

    return _with_author(queryset).order_by(F("published_at").desc(nulls_last=True), "-created_at")


# --- dashboard counts -------------------------------------------------------


def _status_counts(queryset: QuerySet) -> dict[str, int]:
    return queryset.aggregate(
        total=Count("id"),
        draft=Count("id", filter=Q(status=Article.Status.DRAFT)),
        in_review=Count("id", filter=Q(status=Article.Status.IN_REVIEW)),
        published=Count("id", filter=Q(status=Article.Status.PUBLISHED)),
    )


def owner_counts(caller: Account) -> dict[str, int]:
    counts = _status_counts(Article.objects.filter(author=caller))
    return {
        "total_articles": counts["total"],
        "drafts": counts["draft"],
        "published": counts["published"],
        "in_review": counts["in_review"],
    }


def admin_counts() -> dict[str, int]:
    counts = _status_counts(Article.objects.all())
    return {
        "total_editors": Account.objects.exclude(role=Account.Role.ADMIN).count(),
        "total_articles": counts["total"],
        "published_articles": counts["published"],
        "draft_articles": counts["draft"],
        "pending_reviews": counts["in_review"],
    }


__all__ = [
    "normalize_categories",
    "validate_categories",
    "create_article",
    "update_article",
    "set_status",
    "get_owned_article",
    "get_article",
    "get_published_article",
    "list_for_owner",
    "list_for_admin",
    "list_published",
    "owner_counts",
    "admin_counts",
]
