# laris/scaffolds/laravel_event.py
from __future__ import annotations
import re
from pathlib import Path

EVENTS_DIR = Path("app") / "Events"
DEFAULT_EVENT_NAME = "ExampleEvent"

# StudlyCase PHP class name, e.g. OrderShipped
_CLASS_NAME_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


class EventExists(FileExistsError):
    pass


def validate_event_name(name: str) -> str:
    name = (name or "").strip()
    if not _CLASS_NAME_RE.match(name):
        raise ValueError(f"Invalid event name '{name}': use a StudlyCase class name like OrderShipped")
    return name


def event_path(root: Path | str, name: str) -> Path:
    return Path(root) / EVENTS_DIR / f"{validate_event_name(name)}.php"


def write_event(root: Path | str, name: str, source: str, *, force: bool = False) -> Path:
    """Write generated source verbatim to app/Events/<name>.php."""
    path = event_path(root, name)
    if path.exists() and not force:
        raise EventExists(f"{path} already exists (use --force to overwrite)")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path
