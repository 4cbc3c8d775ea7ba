import logging
import secrets
from typing import Any, List, Mapping, Optional

from app.core.domain.errors import AuthError, ConflictError, ValidationError
from app.core.domain.user import (
    AuthResult,
    UserMatch,
    UserRecord,
    email_matches,
    new_user_record,
    sanitize_user,
)
from app.infrastructure.security.tokens import issue_session_marker
from app.infrastructure.storage.shard_store import ShardStore, normalize_role

logger = logging.getLogger("users")

INVALID_CREDENTIALS = "Invalid email or password"


def find_by_email(store: ShardStore, email: Optional[str]) -> Optional[UserMatch]:
    """
    Scan every shard for a record whose email matches case-insensitively.
    Full scan on each call; shard order is whatever the store enumerates.
    """
    if not email:
        return None
    for role in store.roles():
        for record in store.read(role):
            if isinstance(record, dict) and email_matches(record, email):
                return UserMatch(user=record, role=role)
    return None


def register_user(
    store: ShardStore,
    full_name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    role: Optional[str],
    phone: Optional[str] = None,
) -> AuthResult:
    if not full_name or not email or not password or not role:
        raise ValidationError("Missing required fields")
    shard = normalize_role(role)

    # Uniqueness check and append share one critical section across shards.
    with store.lock:
        if find_by_email(store, email) is not None:
            logger.warning(
                "Registration blocked: email already registered",
                extra={"email": email},
            )
            raise ConflictError("User already exists")

        user = new_user_record(
            full_name=full_name, email=email, password=password, role=shard, phone=phone
        )
        records = store.read(shard)
        records.append(user)
        store.write(shard, records)

    logger.info("User registered", extra={"user_id": user["id"], "role": shard})
    return AuthResult(user=sanitize_user(user), token=issue_session_marker())


def _password_matches(stored: Any, supplied: str) -> bool:
    if not isinstance(stored, str):
        return False
    return secrets.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


def authenticate_user(
    store: ShardStore, email: Optional[str], password: Optional[str]
) -> AuthResult:
    if not email or not password:
        raise ValidationError("Email and password are required")

    match = find_by_email(store, email)
    if match is None or not _password_matches(match.user.get("password"), password):
        logger.warning("Login failed: invalid credentials", extra={"email": email})
        raise AuthError(INVALID_CREDENTIALS)

    logger.info(
        "Login success", extra={"user_id": match.user.get("id"), "role": match.role}
    )
    return AuthResult(user=sanitize_user(match.user), token=issue_session_marker())


def save_raw_user(store: ShardStore, payload: Any) -> None:
    """
    Legacy path: append the payload verbatim, with no validation or sanitizing.
    Bodies that are not objects carry no role and land in the "unknown" shard.
    """
    role = payload.get("role") if isinstance(payload, Mapping) else None
    shard = normalize_role(role or "unknown")
    record = dict(payload) if isinstance(payload, Mapping) else payload
    with store.lock:
        records = store.read(shard)
        records.append(record)
        store.write(shard, records)
    logger.info("Raw user saved", extra={"role": shard})


def list_role_users(store: ShardStore, role: Optional[str]) -> List[UserRecord]:
    return store.read(role)
