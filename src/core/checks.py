"""System checks for deployment readiness.

``manage.py check --database default`` runs the database-tagged checks, so a
deployment can fail fast before serving when the store is unreachable.
"""

from django.core.checks import Error, Tags, register
from django.db import DatabaseError, connections


@register(Tags.database)
def database_reachable(app_configs, databases=None, **kwargs):
    """Ensure every requested database alias accepts a connection."""
    errors: list[Error] = []

    for alias in databases or []:
        try:
            connections[alias].ensure_connection()
        except DatabaseError as exc:
            errors.append(
                Error(
                    f"Database '{alias}' is unreachable: {exc}",
                    hint="Check DATABASE_URL / POSTGRES_* settings.",
                    id="core.E001",
                )
            )

    return errors
