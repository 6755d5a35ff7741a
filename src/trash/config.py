"""
Trash configuration

Environment driven settings used when the bundled SQLAlchemy data store
builds its own engine.
"""

import os

DATABASE_URL = os.getenv("TRASH_DATABASE_URL", "sqlite:///:memory:")
SQL_ECHO = os.getenv("TRASH_SQL_ECHO", "0").lower() in ("1", "true", "yes")
