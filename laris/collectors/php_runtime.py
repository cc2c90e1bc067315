# laris/collectors/php_runtime.py
from __future__ import annotations
import json
import os
from typing import Any, Dict, Optional

from laris.artisan import ArtisanError, ArtisanRunner
from laris.facts import IMPORTANT_EXTENSIONS, MemoryFacts, SystemFacts

_BYTE_UNITS = ("B", "KB", "MB", "GB")

# Runs inside `php -r`; prints one JSON object on stdout.
_PROBE_TEMPLATE = (
    "$e=[];foreach({extensions} as $x){{$e[$x]=extension_loaded($x);}}"
    "$o=function_exists('opcache_get_status')?@opcache_get_status(false):false;"
    "echo json_encode(["
    "'php_version'=>PHP_VERSION,"
    "'memory_limit'=>ini_get('memory_limit'),"
    "'max_execution_time'=>ini_get('max_execution_time'),"
    "'opcache_enabled'=>is_array($o)&&!empty($o['opcache_enabled']),"
    "'extensions'=>$e,"
    "'memory'=>["
    "'current'=>memory_get_usage(),"
    "'peak'=>memory_get_peak_usage(),"
    "'current_real'=>memory_get_usage(true),"
    "'peak_real'=>memory_get_peak_usage(true)"
    "]]);"
)


def probe_script() -> str:
    return _PROBE_TEMPLATE.format(extensions=json.dumps(list(IMPORTANT_EXTENSIONS)))


def format_bytes(num: int) -> str:
    """1536 -> '1.5 KB'. Caps at GB."""
    num = max(int(num), 0)
    power = 0
    while num >= 1024 ** (power + 1) and power < len(_BYTE_UNITS) - 1:
        power += 1
    value = round(num / (1024 ** power), 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_BYTE_UNITS[power]}"


def host_load_average() -> Optional[list]:
    if not hasattr(os, "getloadavg"):
        return None
    try:
        return list(os.getloadavg())
    except OSError:
        return None


class PhpRuntimeProvider:
    """Reads PHP runtime settings through a single `php -r` probe.

    The probe runs at most once per provider; the system and memory sections
    share its output.
    """

    def __init__(self, runner: ArtisanRunner):
        self.runner = runner
        self._probe: Optional[Dict[str, Any]] = None
        self._probe_error: Optional[str] = None

    def probe(self) -> Dict[str, Any]:
        if self._probe is None and self._probe_error is None:
            try:
                out = self.runner.php_eval(probe_script())
                data = json.loads(out)
                if not isinstance(data, dict):
                    raise ValueError("probe did not return an object")
                self._probe = data
            except (ArtisanError, ValueError) as e:
                self._probe_error = str(e)
        if self._probe_error is not None:
            raise ArtisanError(self._probe_error)
        return self._probe or {}

    def system(self) -> SystemFacts:
        load = host_load_average()
        try:
            data = self.probe()
        except ArtisanError as e:
            return SystemFacts(
                extensions={ext: False for ext in IMPORTANT_EXTENSIONS},
                system_load=load,
                error=f"Could not read PHP runtime: {e}",
            )
        loaded = data.get("extensions") or {}
        return SystemFacts(
            php_version=str(data.get("php_version", "")),
            memory_limit=str(data.get("memory_limit", "")),
            max_execution_time=str(data.get("max_execution_time", "")),
            opcache_enabled=bool(data.get("opcache_enabled", False)),
            extensions={ext: bool(loaded.get(ext, False)) for ext in IMPORTANT_EXTENSIONS},
            system_load=load,
        )

    def memory(self) -> MemoryFacts:
        try:
            data = self.probe()
        except ArtisanError as e:
            return MemoryFacts(error=f"Could not read PHP memory usage: {e}")
        mem = data.get("memory") or {}
        return MemoryFacts(
            current_usage=format_bytes(mem.get("current", 0)),
            peak_usage=format_bytes(mem.get("peak", 0)),
            current_real_usage=format_bytes(mem.get("current_real", 0)),
            peak_real_usage=format_bytes(mem.get("peak_real", 0)),
            memory_limit=str(data.get("memory_limit", "")),
        )
