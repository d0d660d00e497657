"""
Business services for Tigo.

- authz.py: caller identity, ownership and participant checks
- users.py: user directory and identity resolution
- trips.py: trip catalog
- trip_requests.py: request lifecycle (submit, list, accept/reject)
- messaging.py: conversations and messages
- notifications.py: per-user notification feed
- events.py: post-commit notification events
- migration.py: programmatic Alembic upgrades
"""

__all__: list[str] = []
