"""Konfiguration – JSON-Datei im Datenverzeichnis, überlagert die Defaults."""

import json
import logging
from pathlib import Path

from .paths import CONFIG_PATH

logger = logging.getLogger(__name__)

DEFAULTS = {
    "max_workers": 8,             # parallel gescannte Ordner pro Walk
    "probe_concurrency": 26,      # parallele Laufwerks-Prüfungen (A–Z)
    "powershell_timeout": 30,     # Sekunden
    "follow_symlinks": True,
    "log_level": "INFO",
}


def load_config(path: Path | None = None) -> dict:
    """Liest die Config und ergänzt fehlende Werte aus DEFAULTS.

    Eine kaputte oder unlesbare Datei führt zu den Defaults, nicht zu einem Fehler.
    """
    config_path = path or CONFIG_PATH
    config = dict(DEFAULTS)
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Config nicht lesbar ({config_path}): {e}")
            return config
        if isinstance(stored, dict):
            config.update({k: v for k, v in stored.items() if k in DEFAULTS})
    return config


def save_config(config: dict, path: Path | None = None) -> None:
    config_path = path or CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
