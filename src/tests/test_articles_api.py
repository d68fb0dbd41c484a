"""API tests for the editor, admin, and public article endpoints."""

from __future__ import annotations

import uuid

from rest_framework.test import APIClient

from accounts.models import Account
from articles.models import Article
from tests.utils import FakeRedisTestCase, auth_client, create_account, create_article


class EditorArticleAPITests(FakeRedisTestCase):
    """Authors create, read, and update only their own articles."""

    @classmethod
    def setUpTestData(cls):
        cls.author = create_account("author@example.com")
        cls.other = create_account("other@example.com")
        cls.foreign = create_article(cls.other, title="Not yours")

    def setUp(self):
        self.client_author: APIClient = auth_client(self.author)

    def test_create_requires_authentication(self):
        response = APIClient().post("/api/editor/articles/", {"title": "A", "content": "B"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertIn("message", response.json())

    def test_create_with_defaults(self):
        response = self.client_author.post(
            "/api/editor/articles/", {"title": "A", "content": "B"}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["message"], "Article created successfully")
        self.assertEqual(body["article"]["categories"], ["latest"])
        self.assertEqual(body["article"]["status"], "draft")
        self.assertIsNone(body["article"]["published_at"])
        self.assertEqual(body["article"]["author"]["id"], str(self.author.pk))

    def test_create_normalizes_comma_separated_categories(self):
        response = self.client_author.post(
            "/api/editor/articles/",
            {"title": "A", "content": "B", "categories": "Tech, tech ,Law"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["article"]["categories"], ["tech", "law"])

    def test_null_optional_fields_are_stored_empty(self):
        response = self.client_author.post(
            "/api/editor/articles/",
            {"title": "A", "content": "B", "summary": None, "image_url": None, "source": None},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        article = response.json()["article"]
        self.assertEqual((article["summary"], article["image_url"], article["source"]), ("", "", ""))

    def test_update_with_null_clears_optional_field(self):
        article = create_article(self.author, summary="Old summary", source="Wire")
        response = self.client_author.put(
            f"/api/editor/articles/{article.pk}/", {"summary": None}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        article.refresh_from_db()
        self.assertEqual(article.summary, "")
        self.assertEqual(article.source, "Wire")

    def test_create_validation_errors_are_400_with_message(self):
        cases = [
            {"content": "B"},
            {"title": "A", "content": "B", "status": "archived"},
            {"title": "A", "content": "B", "categories": ["weather"]},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                response = self.client_author.post("/api/editor/articles/", payload, format="json")
                self.assertEqual(response.status_code, 400)
                self.assertIsInstance(response.json()["message"], str)

    def test_list_returns_only_own_articles(self):
        create_article(self.author, title="Mine")
        response = self.client_author.get("/api/editor/articles/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([a["title"] for a in response.json()["articles"]], ["Mine"])

    def test_list_filters_by_status(self):
        create_article(self.author, title="Draft")
        create_article(self.author, title="Live", status=Article.Status.PUBLISHED)

        response = self.client_author.get("/api/editor/articles/", {"status": "published"})
        self.assertEqual([a["title"] for a in response.json()["articles"]], ["Live"])

    def test_retrieve_foreign_or_malformed_is_404(self):
        for article_id in (self.foreign.pk, uuid.uuid4(), "not-an-id"):
            with self.subTest(article_id=article_id):
                response = self.client_author.get(f"/api/editor/articles/{article_id}/")
                self.assertEqual(response.status_code, 404)
                self.assertEqual(response.json()["message"], "Article not found")

    def test_update_is_partial(self):
        article = create_article(self.author, title="Old", summary="Keep")
        response = self.client_author.put(
            f"/api/editor/articles/{article.pk}/", {"title": "New"}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["article"]["title"], "New")
        self.assertEqual(body["article"]["summary"], "Keep")

    def test_update_foreign_article_is_404_and_unchanged(self):
        response = self.client_author.put(
            f"/api/editor/articles/{self.foreign.pk}/", {"title": "Hijack"}, format="json"
        )
        self.assertEqual(response.status_code, 404)
        self.foreign.refresh_from_db()
        self.assertEqual(self.foreign.title, "Not yours")

    def test_author_publish_stamps_published_at(self):
        article = create_article(self.author)
        response = self.client_author.put(
            f"/api/editor/articles/{article.pk}/", {"status": "published"}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertIsNotNone(response.json()["article"]["published_at"])

    def test_overview_counts_own_articles(self):
        create_article(self.author, title="D")
        create_article(self.author, title="P", status=Article.Status.PUBLISHED)

        response = self.client_author.get("/api/editor/overview/")
        self.assertEqual(
            response.json(),
            {"total_articles": 2, "drafts": 1, "published": 1, "in_review": 0},
        )


class AdminArticleAPITests(FakeRedisTestCase):
    """Admins list all articles and control status but cannot edit content."""

    @classmethod
    def setUpTestData(cls):
        cls.admin = create_account("admin@example.com", role=Account.Role.ADMIN)
        cls.author = create_account("author@example.com", name="Ada Author")
        cls.articles = [create_article(cls.author, title=f"Story {i}") for i in range(3)]

    def setUp(self):
        self.client_admin: APIClient = auth_client(self.admin)

    def test_non_admin_is_forbidden(self):
        response = auth_client(self.author).get("/api/admin/articles/")
        self.assertEqual(response.status_code, 403)
        self.assertIn("message", response.json())

    def test_anonymous_is_unauthenticated(self):
        response = APIClient().get("/api/admin/articles/")
        self.assertEqual(response.status_code, 401)

    def test_list_is_paginated_with_author_joined(self):
        response = self.client_admin.get("/api/admin/articles/", {"page": 1, "limit": 2})
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["total"], 3)
        self.assertEqual(body["page"], 1)
        self.assertEqual(body["limit"], 2)
        self.assertEqual(len(body["articles"]), 2)
        self.assertEqual(
            body["articles"][0]["author"],
            {"id": str(self.author.pk), "name": "Ada Author", "email": "author@example.com"},
        )

    def test_list_default_page_size(self):
        body = self.client_admin.get("/api/admin/articles/").json()
        self.assertEqual(body["page"], 1)
        self.assertEqual(body["limit"], 20)

    def test_invalid_page_is_400(self):
        response = self.client_admin.get("/api/admin/articles/", {"page": "zero"})
        self.assertEqual(response.status_code, 400)

    def test_retrieve_any_article(self):
        response = self.client_admin.get(f"/api/admin/articles/{self.articles[0].pk}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["article"]["title"], "Story 0")

    def test_status_publish_then_unpublish_keeps_timestamp(self):
        url = f"/api/admin/articles/{self.articles[0].pk}/status/"

        published = self.client_admin.put(url, {"status": "published"}, format="json").json()["article"]
        self.assertEqual(published["status"], "published")
        self.assertIsNotNone(published["published_at"])

        self.client_admin.put(url, {"status": "draft"}, format="json")
        again = self.client_admin.put(url, {"status": "published"}, format="json").json()["article"]

        self.assertEqual(again["published_at"], published["published_at"])

    def test_status_invalid_value_is_400(self):
        response = self.client_admin.put(
            f"/api/admin/articles/{self.articles[0].pk}/status/", {"status": "live"}, format="json"
        )
        self.assertEqual(response.status_code, 400)

    def test_status_on_malformed_id_is_404(self):
        response = self.client_admin.put("/api/admin/articles/abc/status/", {"status": "draft"}, format="json")
        self.assertEqual(response.status_code, 404)

    def test_editor_cannot_change_status_through_admin_route(self):
        response = auth_client(self.author).put(
            f"/api/admin/articles/{self.articles[0].pk}/status/", {"status": "published"}, format="json"
        )
        self.assertEqual(response.status_code, 403)

    def test_admin_cannot_edit_foreign_content(self):
        response = self.client_admin.put(
            f"/api/editor/articles/{self.articles[0].pk}/", {"title": "Admin rewrite"}, format="json"
        )
        self.assertEqual(response.status_code, 404)

    def test_overview_counts(self):
        Article.objects.filter(pk=self.articles[1].pk).update(status=Article.Status.IN_REVIEW)
        response = self.client_admin.get("/api/admin/overview/")
        self.assertEqual(
            response.json(),
            {
                "total_editors": 1,
                "total_articles": 3,
                "published_articles": 0,
                "draft_articles": 2,
                "pending_reviews": 1,
            },
        )


class PublicArticleAPITests(FakeRedisTestCase):
    """Anonymous readers only ever see published articles."""

    @classmethod
    def setUpTestData(cls):
        cls.author = create_account("author@example.com", name="Reporter")
        cls.published = create_article(
            cls.author, title="Chip shortage ends", categories=["tech"], status=Article.Status.PUBLISHED
        )
        cls.unpublished = create_article(cls.author, title="Chip rumours", categories=["tech"])

    def test_list_hides_unpublished_and_author_email(self):
        response = APIClient().get("/api/public/articles/")
        articles = response.json()["articles"]

        self.assertEqual(response.status_code, 200)
        self.assertEqual([a["title"] for a in articles], ["Chip shortage ends"])
        self.assertEqual(articles[0]["author"], {"id": str(self.author.pk), "name": "Reporter"})
        self.assertNotIn("status", articles[0])

    def test_category_filter_is_case_insensitive(self):
        response = APIClient().get("/api/public/articles/", {"category": "Tech"})
        self.assertEqual([a["title"] for a in response.json()["articles"]], ["Chip shortage ends"])

    def test_search_matches_title(self):
        response = APIClient().get("/api/public/articles/", {"search": "chip"})
        self.assertEqual([a["title"] for a in response.json()["articles"]], ["Chip shortage ends"])

    def test_detail_of_unpublished_is_404(self):
        response = APIClient().get(f"/api/public/articles/{self.unpublished.pk}/")
        self.assertEqual(response.status_code, 404)

        response = APIClient().get(f"/api/public/articles/{self.published.pk}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["article"]["title"], "Chip shortage ends")

    def test_stale_token_does_not_block_public_reads(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION="Bearer expired.or.garbage")

        listing = client.get("/api/public/articles/")
        detail = client.get(f"/api/public/articles/{self.published.pk}/")

        self.assertEqual(listing.status_code, 200)
        self.assertEqual([a["title"] for a in listing.json()["articles"]], ["Chip shortage ends"])
        self.assertEqual(detail.status_code, 200)

    def test_revoked_token_does_not_block_public_reads(self):
        client = auth_client(self.author)
        self.assertEqual(client.post("/api/auth/logout/").status_code, 204)
        self.assertEqual(client.get("/api/public/articles/").status_code, 200)
        self.assertEqual(client.get("/api/editor/articles/").status_code, 401)

    def test_deleted_author_leaves_article_readable(self):
        Account.objects.filter(pk=self.author.pk).delete()
        response = APIClient().get(f"/api/public/articles/{self.published.pk}/")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["article"]["author"])
