# laris/export.py
from __future__ import annotations
import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

from laris.facts import FactBag

SUPPORTED_FORMATS = ("json", "csv")
DEFAULT_FORMAT = "json"
FILENAME_PREFIX = "laris-performance-"
TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
CSV_HEADER = ["Category", "Metric", "Value"]


class UnsupportedExportFormat(ValueError):
    def __init__(self, fmt: str):
        self.fmt = fmt
        super().__init__(f"Unsupported export format: {fmt} (expected one of: {', '.join(SUPPORTED_FORMATS)})")


def normalize_format(fmt: Optional[str]) -> str:
    fmt = (fmt or DEFAULT_FORMAT).strip().lower()
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedExportFormat(fmt)
    return fmt


def export_filename(fmt: str, now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return f"{FILENAME_PREFIX}{stamp}.{fmt}"


def _csv_value(value: Any) -> Any:
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def csv_rows(facts: FactBag) -> Iterator[Tuple[str, str, Any]]:
    """One (category, metric, value) row per metric; nested values stay on one row."""
    for category, metrics in facts.to_dict().items():
        for metric, value in metrics.items():
            yield category, metric, _csv_value(value)


def write_json(facts: FactBag, path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(facts.to_dict(), f, indent=4, ensure_ascii=False)
        f.write("\n")


def write_csv(facts: FactBag, path: Path) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(csv_rows(facts))


def export_facts(
    facts: FactBag,
    fmt: Optional[str] = None,
    *,
    directory: Path | str | None = None,
    now: Optional[datetime] = None,
) -> Path:
    """Write the fact bag to laris-performance-<timestamp>.<fmt>.

    The format is checked before anything is opened, so an unsupported
    format never leaves a file behind. Same-second runs overwrite.
    """
    fmt = normalize_format(fmt)
    path = Path(directory or Path.cwd()) / export_filename(fmt, now)
    if fmt == "json":
        write_json(facts, path)
    else:
        write_csv(facts, path)
    return path


def load_json_export(path: Path | str) -> FactBag:
    with open(path, "r", encoding="utf-8") as f:
        return FactBag.from_dict(json.load(f))


def read_csv_export(path: Path | str) -> List[List[str]]:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return list(csv.reader(f))
