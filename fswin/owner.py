"""Besitzer-Ermittlung – liefert den Owner eines Pfads oder "N/A"."""

import logging
import sys

from . import powershell

logger = logging.getLogger(__name__)

UNKNOWN_OWNER = "N/A"

IS_WINDOWS = sys.platform == "win32"


async def resolve_owner(path: str, *, timeout: float = powershell.DEFAULT_TIMEOUT) -> str:
    """Ermittelt den Besitzer (z.B. "BUILTIN\\Administrators") via ACL-Abfrage.

    Nur unter Windows; überall sonst und bei jedem Fehler "N/A". Bricht nie ab.
    """
    if not IS_WINDOWS:
        return UNKNOWN_OWNER

    command = f"(Get-Item -LiteralPath {powershell.quote_literal(path)} -Force).GetAccessControl().Owner"
    stdout = await powershell.run_powershell(command, timeout=timeout)
    if not stdout:
        logger.debug(f"Kein Owner ermittelbar: {path}")
        return UNKNOWN_OWNER

    # Nur die erste nicht-leere Zeile zählt
    return stdout.splitlines()[0].strip() or UNKNOWN_OWNER
