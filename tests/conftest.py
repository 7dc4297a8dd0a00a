"""Shared pytest fixtures for apple_sdk tests.

Builds fake developer directories on disk:

    <root>/Platforms/<Platform>.platform/Developer/SDKs/<Platform><Version>.sdk
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def make_sdk(sdks_dir: Path, name: str, settings: dict | None = None) -> Path:
    """Create an ``*.sdk`` directory, optionally with ``SDKSettings.json``."""
    sdk = sdks_dir / name
    sdk.mkdir(parents=True, exist_ok=True)
    if settings is not None:
        (sdk / "SDKSettings.json").write_text(json.dumps(settings))
    return sdk


def make_developer_dir(root: Path, layout: dict[str, list[str]]) -> Path:
    """Create a developer directory from ``{platform: [sdk names]}``."""
    for platform, sdks in layout.items():
        sdks_dir = root / "Platforms" / f"{platform}.platform" / "Developer" / "SDKs"
        sdks_dir.mkdir(parents=True, exist_ok=True)
        for name in sdks:
            make_sdk(sdks_dir, name)
    return root


@pytest.fixture
def developer_dir(tmp_path):
    """A developer directory with macOS and iOS platforms."""
    return make_developer_dir(
        tmp_path / "Xcode.app" / "Contents" / "Developer",
        {
            "MacOSX": ["MacOSX13.3.sdk"],
            "iPhoneOS": ["iPhoneOS16.4.sdk"],
        },
    )


@pytest.fixture(autouse=True)
def no_developer_dir_env(monkeypatch):
    """Keep the host's DEVELOPER_DIR out of tests."""
    monkeypatch.delenv("DEVELOPER_DIR", raising=False)


@pytest.fixture
def sdk_factory():
    return make_sdk


@pytest.fixture
def developer_dir_factory():
    return make_developer_dir
