"""JSON-Report generieren und speichern."""

import json
import socket
from datetime import datetime
from pathlib import Path

from . import __version__


def generate_report(kind: str, entries: list[dict], requested: list[str]) -> dict:
    """Erstellt einen strukturierten Report eines CLI-Laufs.

    Args:
        kind: Art der Abfrage ("drives", "drive" oder "details").
        entries: Ergebnisse als Dicts (to_dict() der Modelle).
        requested: Die angefragten Pfade bzw. Laufwerke.

    Returns:
        Strukturierter Report als Dict.
    """
    return {
        "scan_info": {
            "kind": kind,
            "scan_date": datetime.now().isoformat(),
            "hostname": socket.gethostname(),
            "version": __version__,
            "requested": requested,
            "resolved": len(entries),
            "unresolved": max(len(requested) - len(entries), 0),
        },
        "entries": entries,
    }


def save_report(report: dict, output_path: Path) -> None:
    """Schreibt den Report als JSON-Datei."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
