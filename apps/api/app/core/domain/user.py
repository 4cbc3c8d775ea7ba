import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.domain.auth import SessionMarker

UserRecord = Dict[str, Any]

SENSITIVE_FIELDS = ("password", "confirmPassword")


@dataclass
class UserMatch:
    user: UserRecord
    role: str


@dataclass
class AuthResult:
    user: UserRecord
    token: SessionMarker


def utcnow_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_user_record(
    full_name: str,
    email: str,
    password: str,
    role: str,
    phone: Optional[str] = None,
) -> UserRecord:
    return {
        "id": str(uuid.uuid4()),
        "fullName": full_name,
        "email": email,
        "phone": phone or "",
        "role": role.lower(),
        "password": password,
        "createdAt": utcnow_iso(),
    }


def sanitize_user(user: UserRecord) -> UserRecord:
    return {k: v for k, v in user.items() if k not in SENSITIVE_FIELDS}


def email_matches(record: UserRecord, email: Optional[str]) -> bool:
    stored = record.get("email")
    if not isinstance(stored, str) or not email:
        return False
    return stored.lower() == email.lower()
