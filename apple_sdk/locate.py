"""Developer directory resolution for Xcode and the Command Line Tools.

Finds the roots SDK searches start from: the active developer directory
(``DEVELOPER_DIR`` or ``xcode-select``), the default ``Xcode.app``, every
``Xcode*.app`` under ``/Applications`` and the Command Line Tools install.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from .errors import XcodeSelectRunError, XcodeSelectStatusError

logger = logging.getLogger(__name__)

COMMAND_LINE_TOOLS_DEFAULT_PATH = "/Library/Developer/CommandLineTools"
XCODE_APP_DEFAULT_PATH = "/Applications/Xcode.app"
XCODE_APP_DEFAULT_NAME = "Xcode.app"

# Relative path of the developer directory inside an Xcode.app bundle.
XCODE_APP_RELATIVE_PATH_DEVELOPER = "Contents/Developer"

SYSTEM_APPLICATIONS_DIR = "/Applications"
DEVELOPER_DIR_ENV = "DEVELOPER_DIR"
XCODE_SELECT_COMMAND = ("xcode-select", "--print-path")


def default_developer_directory(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the active developer directory.

    ``DEVELOPER_DIR`` wins when set; otherwise ``xcode-select --print-path``
    is consulted. The returned path is not verified to exist.

    Args:
        environ: Environment to read ``DEVELOPER_DIR`` from. Defaults to
            ``os.environ``.

    Raises:
        XcodeSelectRunError: If xcode-select could not be started.
        XcodeSelectStatusError: If xcode-select exited non-zero.
    """
    env = os.environ if environ is None else environ
    if DEVELOPER_DIR_ENV in env:
        return Path(env[DEVELOPER_DIR_ENV])

    try:
        result = subprocess.run(
            list(XCODE_SELECT_COMMAND),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise XcodeSelectRunError(e) from e

    if result.returncode != 0:
        raise XcodeSelectStatusError(result.returncode)

    path = result.stdout.decode("utf-8", errors="replace").strip()
    logger.debug("xcode-select reports developer directory %s", path)
    return Path(path)


def default_xcode_developer_directory(app_path: Union[str, Path] = XCODE_APP_DEFAULT_PATH) -> Optional[Path]:
    """Developer directory of the default Xcode app, or None if missing."""
    path = Path(app_path) / XCODE_APP_RELATIVE_PATH_DEVELOPER
    return path if path.exists() else None


def command_line_tools_sdks_directory(
    install_path: Union[str, Path] = COMMAND_LINE_TOOLS_DEFAULT_PATH,
) -> Optional[Path]:
    """``SDKs`` directory of the Command Line Tools, or None if missing."""
    path = Path(install_path) / "SDKs"
    return path if path.exists() else None


def find_xcode_apps(applications_dir: Union[str, Path]) -> list[Path]:
    """Find ``Xcode*.app`` entries in an applications directory.

    Entries are not checked to be working Xcode installs. ``Xcode.app`` sorts
    first; the rest sort by path. A missing directory yields an empty list.

    Raises:
        OSError: If the directory exists but cannot be listed.
    """
    try:
        entries = list(Path(applications_dir).iterdir())
    except FileNotFoundError:
        return []

    apps = [e for e in entries if e.name.startswith("Xcode") and e.name.endswith(".app")]
    apps.sort(key=lambda p: (p.name != XCODE_APP_DEFAULT_NAME, p))
    return apps


def find_system_xcode_applications() -> list[Path]:
    """Find Xcode applications under ``/Applications``."""
    return find_xcode_apps(SYSTEM_APPLICATIONS_DIR)


def xcode_developer_directories(apps: Iterable[Union[str, Path]]) -> list[Path]:
    """Map Xcode app paths to their existing developer directories."""
    res = []
    for app in apps:
        developer_path = Path(app) / XCODE_APP_RELATIVE_PATH_DEVELOPER
        if developer_path.exists():
            res.append(developer_path)
        else:
            logger.debug("Skipping %s: no %s", app, XCODE_APP_RELATIVE_PATH_DEVELOPER)
    return res


def find_system_xcode_developer_directories() -> list[Path]:
    """Developer directories of every Xcode app under ``/Applications``."""
    return xcode_developer_directories(find_system_xcode_applications())
