"""Seed the initial admin, demo editors, and demo articles."""

from django.core.management.base import BaseCommand

from accounts.managers import AccountManager
from accounts.models import Account
from accounts.services import ensure_initial_admin
from articles import workflow
from articles.models import Article

DEMO_EDITORS = [
    ("Demo Editor", "editor@example.com", "editorpass"),
    ("Second Editor", "editor2@example.com", "editorpass"),
]

DEMO_ARTICLES = [
    # (editor email, title, categories, status)
    ("editor@example.com", "Markets rally on rate news", "business, latest", Article.Status.PUBLISHED),
    ("editor@example.com", "New EV lineup unveiled", ["automobile", "Tech"], Article.Status.IN_REVIEW),
    ("editor@example.com", "Cup final preview", "sports", Article.Status.DRAFT),
    ("editor2@example.com", "Court rules on privacy case", ["law"], Article.Status.PUBLISHED),
    ("editor2@example.com", "Summit opens in Geneva", "international,political", Article.Status.DRAFT),
]


def create_demo_editors() -> dict[str, Account]:
    """Create the demo editor accounts if missing and return an email->Account map."""
    editors = {}
    for name, email, password in DEMO_EDITORS:
        editor, _ = Account.objects.get_or_create(
            email=email,
            defaults={
                "name": name,
                "role": Account.Role.USER,
                "password_hash": AccountManager.hash_password(password),
            },
        )
        editors[email] = editor
    return editors


def create_demo_articles(editors: dict[str, Account]) -> int:
    """Create demo articles through the workflow; returns how many were added."""
    created = 0
    for email, title, categories, status in DEMO_ARTICLES:
        author = editors[email]
        if Article.objects.filter(author=author, title=title).exists():
            continue
        workflow.create_article(
            author,
            {
                "title": title,
                "summary": f"Summary of: {title}",
                "content": f"{title}. Full story to follow.",
                "categories": categories,
                "status": status,
            },
        )
        created += 1
    return created


class Command(BaseCommand):
    """Management command to seed the admin and demo newsroom data."""

    help = (
        "Seed the initial admin plus demo editors and articles. "
        "Use --reset to remove previously seeded demo data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the demo editors and their articles before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding newsroom data...")
        admin, _ = ensure_initial_admin()
        self.stdout.write(f"Admin: {admin.email}")
        editors = create_demo_editors()
        count = create_demo_articles(editors)
        self.stdout.write(self.style.SUCCESS(f"Newsroom seed completed ({count} articles added)."))

    def _reset_seeded_data(self) -> None:
        """Remove demo editors and the articles they authored; the admin is kept."""
        self.stdout.write("Resetting previously seeded demo data...")
        demo_emails = [email for _, email, _ in DEMO_EDITORS]
        Article.objects.filter(author__email__in=demo_emails).delete()
        Account.objects.filter(email__in=demo_emails).delete()
        self.stdout.write(self.style.WARNING("Seeded demo data cleared."))
