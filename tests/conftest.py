"""Gemeinsame pytest-Fixtures."""

import os
import tempfile
from types import SimpleNamespace

# Config/Log/Reports der Tests nicht im echten Datenverzeichnis ablegen
os.environ.setdefault("FSWIN_DATA_DIR", tempfile.mkdtemp(prefix="fswin-test-"))

import pytest

from fswin import powershell


@pytest.fixture
def sample_tree(tmp_path):
    """root/a.txt (100 Bytes) und root/sub/b.txt (50 Bytes)."""
    root = tmp_path / "root"
    sub = root / "sub"
    sub.mkdir(parents=True)
    (root / "a.txt").write_bytes(b"x" * 100)
    (sub / "b.txt").write_bytes(b"y" * 50)
    return root


@pytest.fixture
def fake_powershell(monkeypatch):
    """Ersetzt run_powershell durch eine Attrappe ohne Subprozess.

    ``responses`` ordnet einem Teilstring des Befehls die Ausgabe zu
    (None = Fehler, kein Treffer = None). Alle Befehle landen in ``calls``.
    """
    fake = SimpleNamespace(responses={}, calls=[])

    async def run(command, **kwargs):
        fake.calls.append(command)
        for needle, output in fake.responses.items():
            if needle in command:
                return output
        return None

    monkeypatch.setattr(powershell, "run_powershell", run)
    return fake
