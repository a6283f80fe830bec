"""Pfad-Auflösung für fswin.

Trennt Code-Verzeichnis von User-Daten (Config, Log, Reports). Unter Windows
liegen diese in %LOCALAPPDATA%\\fswin, sonst in ~/.local/share/fswin.
"""

import logging
import os
import sys
from pathlib import Path

APP_NAME = "fswin"


def get_data_dir() -> Path:
    """Beschreibbares Verzeichnis für Config, Logs, Reports.

    Kann über die Umgebungsvariable FSWIN_DATA_DIR überschrieben werden.
    """
    override = os.environ.get("FSWIN_DATA_DIR")
    if override:
        data_dir = Path(override)
    elif sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
        data_dir = Path(base) / APP_NAME
    else:
        data_dir = Path.home() / ".local" / "share" / APP_NAME
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


DATA_DIR = get_data_dir()

# Datei-Pfade
CONFIG_PATH = DATA_DIR / "config.json"
LOG_PATH = DATA_DIR / "fswin.log"
REPORTS_DIR = DATA_DIR / "reports"


def ensure_dirs() -> None:
    """Erstellt alle benötigten Unterverzeichnisse."""
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)


def setup_logging(level: str = "INFO", log_path: Path | None = None) -> None:
    """Richtet das Datei-Logging ein (einmal pro Prozess, vom CLI aufgerufen)."""
    logging.basicConfig(
        filename=str(log_path or LOG_PATH),
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
