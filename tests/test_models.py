from datetime import datetime

import pytest

from fswin.models import DirectoryAggregate, DriveInfo, FileSystemEntryDetails


def test_drive_info_used_space():
    info = DriveInfo("C", "System", total_space_bytes=3 * 1024 ** 3, free_space_bytes=1024 ** 3)
    assert info.used_space_bytes == info.total_space_bytes - info.free_space_bytes
    assert info.used_space == "2 GB"
    assert info.to_dict() == {
        "drive": "C",
        "volume_name": "System",
        "total_space": "3 GB",
        "free_space": "1 GB",
        "used_space": "2 GB",
        "total_space_bytes": 3 * 1024 ** 3,
        "free_space_bytes": 1024 ** 3,
        "used_space_bytes": 2 * 1024 ** 3,
    }


@pytest.mark.parametrize("total, free", [(100, 200), (-1, 0), (100, -5)])
def test_drive_info_rejects_inconsistent_values(total, free):
    with pytest.raises(ValueError):
        DriveInfo("C", "N/A", total_space_bytes=total, free_space_bytes=free)


def test_details_are_immutable():
    details = FileSystemEntryDetails(
        path="C:\\x.txt", name="x.txt", is_file=True, is_folder=False,
        last_modified=datetime(2024, 1, 2, 3, 4, 5), size_bytes=1536,
    )
    assert details.size_formatted == "1.5 KB"
    assert details.to_dict()["size_kb"] == "1.50"
    with pytest.raises(AttributeError):
        details.owner = "jemand"


def test_folder_to_dict_uses_aggregate():
    details = FileSystemEntryDetails(
        path="C:\\Daten", name="Daten", is_file=False, is_folder=True,
        last_modified=datetime(2024, 1, 2, 3, 4, 5),
        aggregate=DirectoryAggregate(total_size_bytes=2048, file_count=3, folder_count=1, complete=False),
    )
    data = details.to_dict()
    assert data["total_size_formatted"] == "2 KB"
    assert data["total_size_kb"] == "2.00"
    assert data["contains_files_count"] == 3
    assert data["contains_folders_count"] == 1
    assert data["complete"] is False
    assert data["owner"] == "N/A"
    assert data["last_modified"] == "2024-01-02T03:04:05"
