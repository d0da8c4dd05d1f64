"""Global pytest configuration."""

import os

# Engine is built lazily from settings; route tests override get_session,
# so this only backs code paths that reach the global engine (/healthz).
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
