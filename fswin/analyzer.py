"""Ordneranalyse – Größe, Datei- und Ordneranzahl eines Teilbaums berechnen.

Iterativ mit explizitem Stapel statt Rekursion, damit beliebig tiefe Bäume
keinen RecursionError auslösen. Bis zu ``max_workers`` Ordner werden parallel
in Threads gelesen (os.scandir + stat); das Zusammenführen der Ergebnisse
passiert ausschließlich im Event-Loop, daher gibt es keine verlorenen Updates.

Fehlerpolitik: Ein Eintrag, dessen stat fehlschlägt, wird übersprungen
(EntryKind.SKIPPED). Ein Ordner, der sich nicht auflisten lässt, zählt mit
Größe 0. Beides bricht den Walk nie ab.

Symlinks/Junctions werden standardmäßig verfolgt und zählen als ihr Ziel.
Jeder Ordner wird über (st_dev, st_ino) identifiziert und höchstens einmal
betreten, Symlink-Zyklen enden also nach einer Runde. Volumes ohne File-IDs
(st_ino == 0, z.B. manche Netzlaufwerke) haben keinen Zyklus-Schutz: dort
wird jeder Ordner betreten.
"""

import asyncio
import logging
import os
import stat
from dataclasses import dataclass, field
from enum import Enum

from .models import DirectoryAggregate

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class EntryKind(Enum):
    FILE = "file"
    FOLDER = "folder"
    OTHER = "other"      # Geräte, Sockets, nicht verfolgte Links
    SKIPPED = "skipped"  # stat fehlgeschlagen (Rechte, kaputter Link, gelöscht)


@dataclass(frozen=True)
class EntryResult:
    kind: EntryKind
    path: str
    size: int = 0
    identity: tuple[int, int] | None = None
    error: OSError | None = None


@dataclass(frozen=True)
class FolderListing:
    """Ergebnis eines einzelnen Ordners: klassifizierte Einträge oder Fehler."""

    path: str
    entries: list[EntryResult] = field(default_factory=list)
    error: OSError | None = None


def folder_identity(st: os.stat_result) -> tuple[int, int] | None:
    """(st_dev, st_ino) eines Ordners, None wenn das Volume keine File-IDs kennt."""
    return (st.st_dev, st.st_ino) if st.st_ino else None


def classify_entry(entry: os.DirEntry, follow_symlinks: bool = True) -> EntryResult:
    """Bestimmt Typ und Größe eines Eintrags über eine Metadaten-Abfrage."""
    try:
        st = entry.stat(follow_symlinks=follow_symlinks)
        if stat.S_ISDIR(st.st_mode) and not st.st_ino:
            # DirEntry.stat() liefert unter Windows keine st_ino/st_dev
            st = os.stat(entry.path, follow_symlinks=follow_symlinks)
    except OSError as e:
        return EntryResult(EntryKind.SKIPPED, entry.path, error=e)

    if stat.S_ISDIR(st.st_mode):
        return EntryResult(EntryKind.FOLDER, entry.path, identity=folder_identity(st))
    if stat.S_ISREG(st.st_mode):
        return EntryResult(EntryKind.FILE, entry.path, size=st.st_size)
    return EntryResult(EntryKind.OTHER, entry.path)


def scan_folder(path: str, follow_symlinks: bool = True) -> FolderListing:
    """Listet einen Ordner (eine Ebene) und klassifiziert jeden Eintrag.

    Bricht das Auflisten mittendrin ab, bleiben die bis dahin gelesenen
    Einträge erhalten und ``error`` ist gesetzt.
    """
    entries = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                entries.append(classify_entry(entry, follow_symlinks))
    except OSError as e:
        return FolderListing(path, entries, error=e)
    return FolderListing(path, entries)


class _Accumulator:
    """Laufende Summen eines Walks. Wird nur im Event-Loop verändert."""

    def __init__(self):
        self.total_size = 0
        self.file_count = 0
        self.folder_count = 0
        self.skipped_entries = 0
        self.unreadable_folders = 0
        self.visited: set[tuple[int, int]] = set()

    def merge(self, listing: FolderListing) -> list[str]:
        """Addiert ein Ordner-Ergebnis und gibt die zu betretenden Unterordner zurück."""
        if listing.error is not None:
            self.unreadable_folders += 1
            logger.debug(f"Ordner nicht lesbar: {listing.path} ({listing.error})")

        subfolders = []
        for result in listing.entries:
            if result.kind is EntryKind.FILE:
                self.file_count += 1
                self.total_size += result.size
            elif result.kind is EntryKind.FOLDER:
                self.folder_count += 1
                if result.identity is not None:
                    if result.identity in self.visited:
                        logger.debug(f"Ordner bereits besucht (Link/Zyklus): {result.path}")
                        continue
                    self.visited.add(result.identity)
                subfolders.append(result.path)
            elif result.kind is EntryKind.SKIPPED:
                self.skipped_entries += 1
                logger.debug(f"Eintrag übersprungen: {result.path} ({result.error})")
        return subfolders

    def snapshot(self, complete: bool) -> DirectoryAggregate:
        return DirectoryAggregate(
            total_size_bytes=self.total_size,
            file_count=self.file_count,
            folder_count=self.folder_count,
            skipped_entries=self.skipped_entries,
            unreadable_folders=self.unreadable_folders,
            complete=complete,
        )


async def aggregate_folder(
    path: str | os.PathLike,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    follow_symlinks: bool = True,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> DirectoryAggregate:
    """Berechnet Gesamtgröße, Datei- und Ordneranzahl unterhalb von ``path``.

    Args:
        path: Wurzelordner. Er selbst wird nicht mitgezählt.
        max_workers: Maximal gleichzeitig gelesene Ordner.
        follow_symlinks: Links/Junctions als ihr Ziel zählen (sonst ignoriert).
        timeout: Sekunden, nach denen der Walk abgebrochen wird.
        cancel_event: Wird es gesetzt, bricht der Walk ebenfalls ab.

    Returns:
        DirectoryAggregate. Bei Timeout oder cancel_event die bis dahin
        gesammelten Summen mit ``complete=False``.
    """
    loop = asyncio.get_running_loop()
    deadline = None if timeout is None else loop.time() + timeout
    root = os.fspath(path)
    acc = _Accumulator()

    try:
        root_identity = folder_identity(await asyncio.to_thread(os.stat, root))
        if root_identity is not None:
            acc.visited.add(root_identity)
    except OSError:
        pass  # scan_folder meldet denselben Fehler als unlesbaren Ordner

    pending = [root]
    running: set[asyncio.Future] = set()
    cancel_waiter = asyncio.ensure_future(cancel_event.wait()) if cancel_event else None
    complete = True

    try:
        while pending or running:
            if (cancel_event is not None and cancel_event.is_set()) or (
                deadline is not None and loop.time() >= deadline
            ):
                complete = False
                logger.info(f"Ordneranalyse abgebrochen: {root}")
                break

            while pending and len(running) < max(max_workers, 1):
                folder = pending.pop()
                running.add(asyncio.ensure_future(asyncio.to_thread(scan_folder, folder, follow_symlinks)))

            waiting = running | {cancel_waiter} if cancel_waiter else running
            remaining = None if deadline is None else max(deadline - loop.time(), 0)
            done, _ = await asyncio.wait(waiting, timeout=remaining, return_when=asyncio.FIRST_COMPLETED)

            for task in done:
                if task is cancel_waiter:
                    continue
                running.discard(task)
                pending.extend(acc.merge(task.result()))
    finally:
        for task in running:
            task.cancel()
        if cancel_waiter is not None:
            cancel_waiter.cancel()

    return acc.snapshot(complete)
