# core/supabase_client.py

import time
from typing import Optional

from supabase import create_client, Client
from core.config import settings
from core.logging_config import logger


# Tables every backend function depends on
HEALTH_TABLES = ("users", "companies", "master_codes")


# ============================================================
# Service-role client
# ============================================================

def get_supabase_client() -> Optional[Client]:
    """
    Supabase client authenticated with the service role key, or None
    when Supabase is not configured.

    The service role is needed for auth.get_user, the auth.admin API
    (create_user, delete_user, list_users, update_user_by_id) and for
    reading users regardless of RLS.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        logger.error(
            "Supabase not configured "
            f"(URL: {'SET' if settings.SUPABASE_URL else 'MISSING'}, "
            f"SERVICE ROLE KEY: {'SET' if settings.SUPABASE_SERVICE_ROLE_KEY else 'MISSING'})"
        )
        return None

    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# Connectivity check for /health/db
# ============================================================

def ping_supabase() -> dict:
    """
    Reads one id from each of HEALTH_TABLES and times it.
    Auth tables are not touched.
    """
    client = get_supabase_client()
    if client is None:
        return {"status": "not_configured", "tables": {}}

    tables = {}
    for table in HEALTH_TABLES:
        started = time.perf_counter()
        try:
            client.table(table).select("id").limit(1).execute()
        except Exception as err:
            logger.warning(f"Health check failed for {table}: {err}")
            tables[table] = {"status": "error", "detail": str(err)}
            continue

        tables[table] = {
            "status": "ok",
            "latency_ms": round((time.perf_counter() - started) * 1000, 1),
        }

    healthy = all(t["status"] == "ok" for t in tables.values())
    return {"status": "ok" if healthy else "degraded", "tables": tables}
