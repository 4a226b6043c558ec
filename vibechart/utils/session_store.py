from __future__ import annotations

import json
import random
import re
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..services.errors import RequestShapeError, SessionNotFoundError

SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,128}")


def new_session_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


class SessionStore:
    """Persist saved charts per session as JSON snapshots under a storage root."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    new_session_id = staticmethod(new_session_id)

    def save(
        self,
        session_id: str,
        config: Mapping[str, Any],
        chart_data: List[Dict[str, Any]],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        session_dir = self._session_dir(session_id)
        session_dir.mkdir(parents=True, exist_ok=True)

        saved_at = datetime.now(timezone.utc)
        record = {
            "sessionId": session_id,
            "chartName": name or "Untitled chart",
            "description": description or "",
            "config": dict(config),
            "chartData": chart_data,
            "savedAt": saved_at.isoformat(),
        }
        snapshot = session_dir / f"{saved_at.strftime('%Y%m%dT%H%M%S%fZ')}.json"
        self._write_json(snapshot, record)
        self._write_json(session_dir / "current.json", record)
        return record

    def load_latest(self, session_id: str) -> Dict[str, Any]:
        current = self._session_dir(session_id) / "current.json"
        if not current.exists():
            raise SessionNotFoundError("Session not found", details=session_id)
        return json.loads(current.read_text(encoding="utf-8"))

    def snapshots(self, session_id: str) -> List[Path]:
        session_dir = self._session_dir(session_id)
        if not session_dir.exists():
            return []
        return sorted(path for path in session_dir.glob("*.json") if path.name != "current.json")

    def _session_dir(self, session_id: str) -> Path:
        if not session_id or not SESSION_ID_PATTERN.fullmatch(session_id):
            raise RequestShapeError("Invalid session id", details=str(session_id))
        return self.root / session_id

    def _write_json(self, path: Path, data: Any) -> None:
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
