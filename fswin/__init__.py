"""fswin – Windows-Dateisystem-Metadaten (Laufwerke, Kapazität, Datei-/Ordnerdetails)."""

__version__ = "1.0.0"

from .analyzer import aggregate_folder
from .details import get_file_or_folder_details
from .drives import get_drive_details, list_accessible_drives
from .models import DirectoryAggregate, DriveInfo, FileSystemEntryDetails
from .utils import format_bytes

__all__ = [
    "DirectoryAggregate",
    "DriveInfo",
    "FileSystemEntryDetails",
    "aggregate_folder",
    "format_bytes",
    "get_drive_details",
    "get_file_or_folder_details",
    "list_accessible_drives",
]
