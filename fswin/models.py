"""Datenmodelle – unveränderliche Ergebnis-Objekte der drei Abfragen."""

from dataclasses import dataclass
from datetime import datetime

from .utils import format_bytes


@dataclass(frozen=True)
class DirectoryAggregate:
    """Summen eines Ordner-Teilbaums (der Wurzelordner selbst zählt nicht mit).

    ``skipped_entries`` und ``unreadable_folders`` sind nur Zusatzinfos:
    nicht lesbare Einträge fließen nie in die Summen ein.
    """

    total_size_bytes: int = 0
    file_count: int = 0
    folder_count: int = 0
    skipped_entries: int = 0
    unreadable_folders: int = 0
    complete: bool = True


@dataclass(frozen=True)
class FileSystemEntryDetails:
    path: str
    name: str
    is_file: bool
    is_folder: bool
    last_modified: datetime
    owner: str = "N/A"
    size_bytes: int | None = None
    aggregate: DirectoryAggregate | None = None

    @property
    def size_formatted(self) -> str | None:
        return None if self.size_bytes is None else format_bytes(self.size_bytes)

    @property
    def total_size_bytes(self) -> int | None:
        return None if self.aggregate is None else self.aggregate.total_size_bytes

    @property
    def total_size_formatted(self) -> str | None:
        return None if self.aggregate is None else format_bytes(self.aggregate.total_size_bytes)

    @property
    def contains_files_count(self) -> int | None:
        return None if self.aggregate is None else self.aggregate.file_count

    @property
    def contains_folders_count(self) -> int | None:
        return None if self.aggregate is None else self.aggregate.folder_count

    def to_dict(self) -> dict:
        """Flaches Dict für JSON-Reports (Datei- bzw. Ordner-Felder je nach Typ)."""
        data = {
            "path": self.path,
            "name": self.name,
            "is_file": self.is_file,
            "is_folder": self.is_folder,
            "last_modified": self.last_modified.isoformat(),
            "owner": self.owner,
        }
        if self.is_file:
            data["size_bytes"] = self.size_bytes
            data["size_kb"] = f"{self.size_bytes / 1024:.2f}"
            data["size_formatted"] = self.size_formatted
        if self.aggregate is not None:
            data["total_size_bytes"] = self.total_size_bytes
            data["total_size_kb"] = f"{self.total_size_bytes / 1024:.2f}"
            data["total_size_formatted"] = self.total_size_formatted
            data["contains_files_count"] = self.contains_files_count
            data["contains_folders_count"] = self.contains_folders_count
            data["complete"] = self.aggregate.complete
        return data


@dataclass(frozen=True)
class DriveInfo:
    drive: str
    volume_name: str
    total_space_bytes: int
    free_space_bytes: int

    def __post_init__(self):
        if self.total_space_bytes < 0 or self.free_space_bytes < 0:
            raise ValueError(f"Negative Kapazität für Laufwerk {self.drive}")
        if self.free_space_bytes > self.total_space_bytes:
            raise ValueError(
                f"Freier Speicher größer als Kapazität für Laufwerk {self.drive}: "
                f"{self.free_space_bytes} > {self.total_space_bytes}"
            )

    @property
    def used_space_bytes(self) -> int:
        return self.total_space_bytes - self.free_space_bytes

    @property
    def total_space(self) -> str:
        return format_bytes(self.total_space_bytes)

    @property
    def free_space(self) -> str:
        return format_bytes(self.free_space_bytes)

    @property
    def used_space(self) -> str:
        return format_bytes(self.used_space_bytes)

    def to_dict(self) -> dict:
        return {
            "drive": self.drive,
            "volume_name": self.volume_name,
            "total_space": self.total_space,
            "free_space": self.free_space,
            "used_space": self.used_space,
            "total_space_bytes": self.total_space_bytes,
            "free_space_bytes": self.free_space_bytes,
            "used_space_bytes": self.used_space_bytes,
        }
