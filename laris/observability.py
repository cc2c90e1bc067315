# laris/observability.py
from __future__ import annotations
import json
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from laris.settings import get_settings


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _log_path(path: Optional[str] = None) -> str:
    return os.path.expanduser(path or get_settings().AUDIT_LOG)


def new_run_id() -> str:
    return uuid.uuid4().hex[:12]


def audit_log(
    *,
    run_id: str,
    action: str,
    status: str,
    params: Dict[str, Any] | None = None,
    message: str | None = None,
    path: str | None = None,
) -> None:
    """
    Append one JSON line to the audit file.
    status: "start" | "ok" | "error" | "skip"
    """
    rec = {
        "ts": _now_iso(),
        "run_id": run_id,
        "action": action,
        "status": status,
        "params": params or {},
        "message": message or "",
    }
    target = _log_path(path)
    try:
        parent = os.path.dirname(target)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(target, "a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False, default=str) + "\n")
    except OSError as e:
        print(f"! audit log not written ({target}): {e}")


def _read_records(path: str) -> List[Dict[str, Any]]:
    if not os.path.exists(path):
        return []
    out: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for ln in f:
            ln = ln.strip()
            if not ln:
                continue
            try:
                out.append(json.loads(ln))
            except json.JSONDecodeError:
                # a torn line from an interrupted write
                continue
    return out


def list_events(limit: int = 200, path: str | None = None) -> List[Dict[str, Any]]:
    records = _read_records(_log_path(path))
    return records[-limit:] if limit > 0 else []


def list_run(run_id: str, path: str | None = None) -> List[Dict[str, Any]]:
    return [r for r in _read_records(_log_path(path)) if r.get("run_id") == run_id]
