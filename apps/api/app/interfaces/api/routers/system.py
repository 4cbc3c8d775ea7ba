import html
import os
from typing import Dict, List

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.core.domain.user import utcnow_iso
from app.interfaces.api.schemas import HealthResponse

router = APIRouter()

ENV_VARIABLES = [
    ("PORT", "Server port"),
    ("APP_ENV", "Application environment"),
    ("USERS_DATA_DIR", "User shard directory"),
    ("DATABASE_URL", "PostgreSQL connection URL (Railway)"),
    ("PGHOST", "Postgres host"),
    ("PGPORT", "Postgres port"),
    ("PGUSER", "Postgres user"),
    ("PGPASSWORD", "Postgres password"),
    ("PGDATABASE", "Postgres database"),
    ("REDIS_URL", "Redis connection URL (Railway)"),
    ("REDIS_HOST", "Redis host"),
    ("REDIS_PORT", "Redis port"),
    ("REDIS_PASSWORD", "Redis password"),
    ("RAILWAY_ENVIRONMENT", "Railway environment id"),
    ("RAILWAY_ENVIRONMENT_NAME", "Railway environment name"),
    ("RAILWAY_PROJECT_ID", "Railway project id"),
    ("RAILWAY_SERVICE_NAME", "Railway service name"),
    ("RAILWAY_STATIC_URL", "Railway static URL"),
]

INDEX_HTML = """
<h1>Ninofi API Server</h1>
<p>Available endpoints:</p>
<ul>
  <li>POST /api/auth/register - Register a new user</li>
  <li>POST /api/auth/login - Login with existing user</li>
  <li>POST /api/users - (Legacy) Save raw user data</li>
  <li>GET /api/users/:role - Fetch users for a role</li>
  <li>GET /env - View environment variables (Railway, Postgres, Redis)</li>
</ul>
"""


def redact_value(value: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    if len(normalized) <= 8:
        return "*" * len(normalized)
    return f"{normalized[:4]}…{normalized[-4:]}"


def collect_env() -> List[Dict[str, object]]:
    rows = []
    for key, label in ENV_VARIABLES:
        raw = os.environ.get(key, "")
        has_value = bool(raw)
        rows.append(
            {
                "key": key,
                "label": label,
                "has_value": has_value,
                "redacted": redact_value(raw) if has_value else "not set",
            }
        )
    return rows


def _render_env_page(rows: List[Dict[str, object]]) -> str:
    body = "".join(
        "<tr>"
        f'<td><div class="label">{html.escape(str(row["label"]))}</div>'
        f'<div class="key">{html.escape(str(row["key"]))}</div></td>'
        f'<td><code class="env-value{"" if row["has_value"] else " empty"}">'
        f'{html.escape(str(row["redacted"]))}</code></td>'
        "</tr>"
        for row in rows
    )
    return (
        "<!doctype html>"
        '<html lang="en"><head><meta charset="UTF-8" />'
        "<title>Ninofi Env Vars</title></head><body>"
        "<h1>Environment variables</h1>"
        "<p>Server, Postgres and Redis variables this service can read. "
        "Values are always redacted.</p>"
        "<table><thead><tr><th>Variable</th><th>Value</th></tr></thead>"
        f"<tbody>{body}</tbody></table>"
        "</body></html>"
    )


@router.get("/", response_class=HTMLResponse)
def index() -> str:
    return INDEX_HTML


@router.get("/api/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=utcnow_iso())


@router.get("/env", response_class=HTMLResponse)
def env_page() -> str:
    return _render_env_page(collect_env())
