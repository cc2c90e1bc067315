# laris/artisan.py
from __future__ import annotations
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional

from laris.settings import get_settings


def describe_command(cmd: List[str]) -> str:
    """Shell-quoted command line; inline `php -r` scripts are shortened to a label."""
    if len(cmd) > 2 and cmd[1] == "-r":
        return " ".join(shlex.quote(c) for c in cmd[:2]) + " <script>"
    return " ".join(shlex.quote(c) for c in cmd)


class ArtisanError(RuntimeError):
    """A php/artisan command could not be run or exited non-zero."""


class ArtisanTimeout(ArtisanError):
    """A php/artisan command did not finish within its timeout."""

    def __init__(self, cmd: List[str], timeout: float):
        self.cmd = cmd
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout:g}s: {describe_command(cmd)}")


class ArtisanRunner:
    """Runs `php` and `php artisan` inside a project root with a timeout."""

    def __init__(self, root: Path | str, php_bin: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.root = Path(root)
        self.php_bin = php_bin or settings.PHP_BIN
        self.timeout = timeout if timeout is not None else settings.COMMAND_TIMEOUT

    def run(self, cmd: List[str], *, check: bool = True) -> str:
        try:
            p = subprocess.run(
                cmd,
                cwd=self.root,
                text=True,
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ArtisanTimeout(cmd, self.timeout) from e
        except OSError as e:
            raise ArtisanError(f"Could not run {cmd[0]}: {e}") from e
        if check and p.returncode != 0:
            detail = (p.stderr or p.stdout or "").strip()
            raise ArtisanError(f"Command failed ({p.returncode}): {describe_command(cmd)}\n{detail}".rstrip())
        return p.stdout or ""

    def artisan(self, *args: str, check: bool = True) -> str:
        return self.run([self.php_bin, "artisan", *args], check=check)

    def php_eval(self, code: str) -> str:
        return self.run([self.php_bin, "-r", code])
