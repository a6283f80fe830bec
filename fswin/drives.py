"""Laufwerke – Erkennung erreichbarer Laufwerksbuchstaben und Kapazitäts-Abfrage.

Primär werden A:\\ bis Z:\\ direkt und parallel geprüft. Nur wenn dabei nichts
gefunden wird, fragt ein PowerShell-Fallback die logischen Datenträger ab.
"""

import asyncio
import logging
import os
import re
import string

from . import powershell
from .models import DriveInfo

logger = logging.getLogger(__name__)

DRIVE_LETTERS = string.ascii_uppercase

LOGICAL_DISKS_COMMAND = "Get-CimInstance -ClassName Win32_LogicalDisk | Select-Object -ExpandProperty DeviceID"

DRIVE_DETAILS_COMMAND = (
    "Get-CimInstance -ClassName Win32_LogicalDisk -Filter \"DeviceID='{letter}:'\" "
    "| Select-Object Size, FreeSpace, VolumeName | Format-List"
)

_DRIVE_ID = re.compile(r"^\s*([A-Za-z])(?::\\?)?\s*$")


def normalize_drive(drive: str) -> str | None:
    """Normalisiert 'c', 'C:', 'C:\\' zu 'C'. Gibt None bei ungültiger Eingabe."""
    match = _DRIVE_ID.match(drive or "")
    return match.group(1).upper() if match else None


def _probe(letter: str) -> bool:
    return os.access(f"{letter}:\\", os.F_OK)


async def _probe_all(concurrency: int) -> list[str]:
    semaphore = asyncio.Semaphore(max(concurrency, 1))

    async def probe(letter: str) -> str | None:
        async with semaphore:
            try:
                accessible = await asyncio.to_thread(_probe, letter)
            except OSError:
                return None
            return letter if accessible else None

    results = await asyncio.gather(*(probe(letter) for letter in DRIVE_LETTERS))
    return [letter for letter in results if letter]


async def list_accessible_drives(
    *,
    probe_concurrency: int = 26,
    powershell_timeout: float = powershell.DEFAULT_TIMEOUT,
) -> list[str]:
    """Gibt alle erreichbaren Laufwerksbuchstaben zurück, aufsteigend sortiert.

    Wirft nie – bei Totalausfall ist das Ergebnis eine leere Liste.
    """
    drives = await _probe_all(probe_concurrency)

    if not drives:
        logger.info("Keine Laufwerke per Direktzugriff gefunden, PowerShell-Fallback")
        stdout = await powershell.run_powershell(LOGICAL_DISKS_COMMAND, timeout=powershell_timeout)
        if stdout:
            drives = powershell.parse_device_ids(stdout)

    return sorted(set(drives))


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


async def get_drive_details(
    drive: str,
    *,
    powershell_timeout: float = powershell.DEFAULT_TIMEOUT,
) -> DriveInfo | None:
    """Fragt Kapazität, freien Speicher und Volume-Namen eines Laufwerks ab.

    Args:
        drive: Laufwerksbuchstabe ('C', 'C:' oder 'C:\\').

    Returns:
        DriveInfo, oder None wenn das Laufwerk unbekannt ist, die Abfrage
        fehlschlägt oder die Ausgabe nicht auswertbar ist.
    """
    letter = normalize_drive(drive)
    if letter is None:
        logger.warning(f"Ungültiger Laufwerksbezeichner: {drive!r}")
        return None

    stdout = await powershell.run_powershell(
        DRIVE_DETAILS_COMMAND.format(letter=letter), timeout=powershell_timeout,
    )
    if not stdout:
        return None

    details = powershell.parse_format_list(stdout)
    total = _parse_int(details.get("Size"))
    free = _parse_int(details.get("FreeSpace"))
    if total is None or free is None:
        logger.debug(f"Laufwerk {letter}: keine auswertbare Kapazität in {details}")
        return None

    try:
        return DriveInfo(
            drive=letter,
            volume_name=details.get("VolumeName") or "N/A",
            total_space_bytes=total,
            free_space_bytes=free,
        )
    except ValueError as e:
        logger.warning(f"Laufwerk {letter}: {e}")
        return None
