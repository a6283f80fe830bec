"""PowerShell-Anbindung – externer Kollaborator für Laufwerks- und Besitzer-Abfragen.

Alle Aufrufe laufen als asynchrone Subprozesse. Fehler (Exit-Code != 0, Timeout,
fehlende powershell.exe, leere Ausgabe) bedeuten immer "keine Daten" (None),
nie eine Exception beim Aufrufer. Das Parsen der Text-Ausgabe bleibt komplett
in diesem Modul.
"""

import asyncio
import contextlib
import locale
import logging
import re
import shutil
import subprocess
import sys
import weakref

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_CONCURRENCY = 4

_DEVICE_ID = re.compile(r"^[ \t]*([A-Za-z]):", re.MULTILINE)

# Ein Semaphor pro Event-Loop (asyncio-Primitive sind an ihren Loop gebunden)
_semaphores: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Semaphore]" = (
    weakref.WeakKeyDictionary()
)


def _get_semaphore() -> asyncio.Semaphore:
    loop = asyncio.get_running_loop()
    semaphore = _semaphores.get(loop)
    if semaphore is None:
        semaphore = asyncio.Semaphore(DEFAULT_CONCURRENCY)
        _semaphores[loop] = semaphore
    return semaphore


def find_executable() -> str | None:
    """Findet Windows PowerShell, sonst PowerShell 7 (pwsh)."""
    return shutil.which("powershell") or shutil.which("pwsh")


def quote_literal(value: str) -> str:
    """Quotet einen Wert als PowerShell-Literal ('...' mit verdoppelten ')."""
    return "'" + value.replace("'", "''") + "'"


def _decode(raw: bytes) -> str:
    # UTF-8 zuerst, sonst Konsolen-Codepage; Null-Bytes entfernen
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        text = raw.decode(locale.getpreferredencoding(False), errors="replace")
    return text.replace("\x00", "")


async def run_powershell(command: str, *, timeout: float = DEFAULT_TIMEOUT) -> str | None:
    """Führt einen PowerShell-Befehl aus und gibt stdout zurück.

    Höchstens DEFAULT_CONCURRENCY Prozesse laufen gleichzeitig. Wird der Aufruf
    abgebrochen, wird der Prozess beendet, bevor CancelledError weiterläuft.

    Args:
        command: Der PowerShell-Befehl (wird als -Command übergeben).
        timeout: Maximale Laufzeit in Sekunden; danach wird der Prozess beendet.

    Returns:
        Die bereinigte Ausgabe oder None bei jedem Fehler bzw. leerer Ausgabe.
    """
    executable = find_executable()
    if executable is None:
        logger.debug("PowerShell nicht gefunden")
        return None

    kwargs = {}
    if sys.platform == "win32":
        kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW

    async with _get_semaphore():
        try:
            proc = await asyncio.create_subprocess_exec(
                executable, "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command", command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **kwargs,
            )
        except OSError as e:
            logger.warning(f"PowerShell konnte nicht gestartet werden: {e}")
            return None

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"PowerShell-Timeout nach {timeout}s: {command}")
            return None
        finally:
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

    if proc.returncode != 0:
        logger.debug(f"PowerShell Exit-Code {proc.returncode}: {_decode(stderr).strip()}")
        return None

    output = _decode(stdout).strip()
    return output or None


def parse_format_list(text: str) -> dict[str, str]:
    """Parsed 'Key : Value'-Zeilen (Ausgabe von Format-List) in ein Dict.

    Getrennt wird am ersten Doppelpunkt, Zeilen ohne Wert werden ignoriert.
    """
    details = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        key, value = key.strip(), value.strip()
        if sep and key and value:
            details[key] = value
    return details


def parse_device_ids(text: str) -> list[str]:
    """Extrahiert Laufwerksbuchstaben aus einer DeviceID-Liste ("C:", "D:", ...)."""
    return [m.group(1).upper() for m in _DEVICE_ID.finditer(text)]
