from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import Optional


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=cwd or os.getcwd(), stderr=subprocess.DEVNULL
        )
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, OSError):
        return None


def get_package_version() -> str:
    try:
        return importlib.metadata.version("rawedit")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_commit() -> Optional[str]:
    # Only meaningful when running from a source checkout
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "HEAD"], cwd=str(here))
    return commit[:7] if commit else None


def get_version_string() -> str:
    version = get_package_version()
    commit = get_commit()
    return f"rawedit {version} ({commit})" if commit else f"rawedit {version}"
