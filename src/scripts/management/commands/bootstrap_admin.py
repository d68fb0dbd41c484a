"""Create the initial admin account if no admin exists yet."""

from django.core.management.base import BaseCommand

from accounts.services import ensure_initial_admin


class Command(BaseCommand):
    help = "Create the initial admin account from INITIAL_ADMIN_* settings unless an admin already exists."

    def handle(self, *args, **options):
        admin, created = ensure_initial_admin()
        if created:
            self.stdout.write(self.style.SUCCESS(f"Admin created: {admin.email}"))
        else:
            self.stdout.write(f"Admin already exists: {admin.email}")
