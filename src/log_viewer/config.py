"""Environment-variable-based configuration for the workout log viewer."""

from __future__ import annotations

import os

SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY: str = (
    os.environ.get("SUPABASE_KEY")
    or os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    or os.environ.get("SUPABASE_ANON_KEY", "")
)
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
HISTORY_LIMIT: int = int(os.environ.get("HISTORY_LIMIT", "50"))
