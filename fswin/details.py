"""Datei-/Ordnerdetails – stat, Besitzer und (bei Ordnern) Teilbaum-Summen."""

import asyncio
import logging
import os
import stat
from datetime import datetime

from . import powershell
from .analyzer import DEFAULT_MAX_WORKERS, aggregate_folder
from .models import DirectoryAggregate, FileSystemEntryDetails
from .owner import resolve_owner

logger = logging.getLogger(__name__)


async def get_file_or_folder_details(
    path: str | os.PathLike,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    follow_symlinks: bool = True,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
    powershell_timeout: float = powershell.DEFAULT_TIMEOUT,
) -> FileSystemEntryDetails | None:
    """Ermittelt die Details einer Datei oder eines Ordners.

    Nur das stat auf ``path`` selbst entscheidet über Erfolg: schlägt es fehl,
    ist das Ergebnis None. Owner-Abfrage und Ordneranalyse laufen parallel und
    degradieren still ("N/A" bzw. unvollständige Summen).

    Args:
        path: Pfad zur Datei bzw. zum Ordner (relativ wird absolut gemacht).
        timeout, cancel_event: Abbruch der Ordneranalyse, siehe aggregate_folder.

    Returns:
        FileSystemEntryDetails oder None.
    """
    abs_path = os.path.abspath(os.fspath(path))

    try:
        st = await asyncio.to_thread(os.stat, abs_path)
    except OSError as e:
        logger.warning(f"Fehler beim Lesen von {abs_path}: {e}")
        return None

    is_folder = stat.S_ISDIR(st.st_mode)
    is_file = stat.S_ISREG(st.st_mode)

    aggregate: DirectoryAggregate | None = None
    owner_lookup = resolve_owner(abs_path, timeout=powershell_timeout)
    if is_folder:
        owner, aggregate = await asyncio.gather(
            owner_lookup,
            aggregate_folder(
                abs_path,
                max_workers=max_workers,
                follow_symlinks=follow_symlinks,
                timeout=timeout,
                cancel_event=cancel_event,
            ),
        )
    else:
        owner = await owner_lookup

    name = os.path.basename(abs_path.rstrip("\\/")) or abs_path

    return FileSystemEntryDetails(
        path=abs_path,
        name=name,
        is_file=is_file,
        is_folder=is_folder,
        last_modified=datetime.fromtimestamp(st.st_mtime),
        owner=owner,
        size_bytes=st.st_size if is_file else None,
        aggregate=aggregate,
    )
