import uuid

from app.core.domain.auth import MOCK_TOKEN_PREFIX, SessionMarker


def issue_session_marker() -> SessionMarker:
    return SessionMarker(value=f"{MOCK_TOKEN_PREFIX}{uuid.uuid4()}")
