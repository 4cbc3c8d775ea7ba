import copy
import json
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from app.core.domain.errors import InvalidRoleError, StorageError
from app.core.domain.user import UserRecord

logger = logging.getLogger("storage")

USERS_SUFFIX = "_users.json"
DEFAULT_ROLE = "unknown"
_ROLE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,63}$")


def normalize_role(role: Optional[str]) -> str:
    if not role:
        return DEFAULT_ROLE
    normalized = str(role).lower()
    if not _ROLE_PATTERN.match(normalized):
        raise InvalidRoleError("Invalid role")
    return normalized


class ShardStore(Protocol):
    """User records partitioned by role, one shard per normalized role."""

    lock: threading.RLock

    def read(self, role: Optional[str]) -> List[UserRecord]:
        ...

    def write(self, role: Optional[str], records: List[UserRecord]) -> None:
        ...

    def roles(self) -> List[str]:
        ...


class JsonShardStore:
    """
    One pretty-printed JSON array per role, stored as `<role>_users.json`.

    Reads are lenient: a missing, unreadable or non-array file is an empty
    shard. Writes go through a temp file and `os.replace`, so a crash never
    leaves a half-written shard behind.
    """

    def __init__(self, data_dir) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.lock = threading.RLock()

    def _path(self, role: Optional[str]) -> Path:
        return self.data_dir / f"{normalize_role(role)}{USERS_SUFFIX}"

    def read(self, role: Optional[str]) -> List[UserRecord]:
        path = self._path(role)
        if not path.exists():
            return []
        return self._load(path)

    def _load(self, path: Path) -> List[UserRecord]:
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError, RecursionError) as exc:
            logger.debug(
                "Treating unreadable shard as empty",
                extra={"path": str(path), "error": exc.__class__.__name__},
            )
            return []
        return data if isinstance(data, list) else []

    def write(self, role: Optional[str], records: List[UserRecord]) -> None:
        path = self._path(role)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.data_dir,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(records, fh, indent=2, ensure_ascii=False)
                fh.write("\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write shard {path.name}") from exc

    def roles(self) -> List[str]:
        try:
            names = sorted(os.listdir(self.data_dir))
        except OSError:
            return []
        roles = [name[: -len(USERS_SUFFIX)] for name in names if name.endswith(USERS_SUFFIX)]
        # Files that do not name a valid role cannot be addressed, so skip them.
        return [role for role in roles if _ROLE_PATTERN.match(role)]


class InMemoryShardStore:
    """Dict-backed store for tests and single-process experiments."""

    def __init__(self, shards: Optional[Dict[str, List[UserRecord]]] = None) -> None:
        self._shards: Dict[str, List[UserRecord]] = {}
        self.lock = threading.RLock()
        for role, records in (shards or {}).items():
            self.write(role, records)

    def read(self, role: Optional[str]) -> List[UserRecord]:
        return copy.deepcopy(self._shards.get(normalize_role(role), []))

    def write(self, role: Optional[str], records: List[UserRecord]) -> None:
        self._shards[normalize_role(role)] = copy.deepcopy(list(records))

    def roles(self) -> List[str]:
        return list(self._shards)
