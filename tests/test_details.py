from datetime import datetime

import pytest

from fswin import details as details_module
from fswin.details import get_file_or_folder_details


@pytest.fixture(autouse=True)
def fixed_owner(monkeypatch):
    async def resolve(path, **kwargs):
        return "TEST\\owner"

    monkeypatch.setattr(details_module, "resolve_owner", resolve)


@pytest.mark.asyncio
async def test_folder_details(sample_tree):
    result = await get_file_or_folder_details(sample_tree)

    assert result.path == str(sample_tree)
    assert result.name == "root"
    assert result.is_folder and not result.is_file
    assert result.owner == "TEST\\owner"
    assert result.total_size_bytes == 150
    assert result.total_size_formatted == "150 Bytes"
    assert result.contains_files_count == 2
    assert result.contains_folders_count == 1
    assert result.size_bytes is None
    assert isinstance(result.last_modified, datetime)


@pytest.mark.asyncio
async def test_file_details(sample_tree):
    result = await get_file_or_folder_details(sample_tree / "a.txt")

    assert result.name == "a.txt"
    assert result.is_file and not result.is_folder
    assert result.size_bytes == 100
    assert result.size_formatted == "100 Bytes"
    assert result.aggregate is None
    assert result.contains_files_count is None


@pytest.mark.asyncio
async def test_relative_path_becomes_absolute(sample_tree, monkeypatch):
    monkeypatch.chdir(sample_tree)
    result = await get_file_or_folder_details("sub")
    assert result.path == str(sample_tree / "sub")
    assert result.contains_files_count == 1


@pytest.mark.asyncio
async def test_missing_path_returns_none(tmp_path):
    assert await get_file_or_folder_details(tmp_path / "nicht-da") is None


@pytest.mark.asyncio
async def test_owner_failure_is_soft(sample_tree, fake_powershell, monkeypatch):
    from fswin import owner

    monkeypatch.setattr(details_module, "resolve_owner", owner.resolve_owner)
    monkeypatch.setattr(owner, "IS_WINDOWS", True)

    result = await get_file_or_folder_details(sample_tree)
    assert result.owner == "N/A"
    assert result.contains_files_count == 2
    assert len(fake_powershell.calls) == 1


@pytest.mark.asyncio
async def test_to_dict_folder(sample_tree):
    data = (await get_file_or_folder_details(sample_tree)).to_dict()

    assert data["is_folder"] is True
    assert data["total_size_bytes"] == 150
    assert data["contains_files_count"] == 2
    assert data["contains_folders_count"] == 1
    assert data["complete"] is True
    assert "size_bytes" not in data
    datetime.fromisoformat(data["last_modified"])


@pytest.mark.asyncio
async def test_to_dict_file(sample_tree):
    data = (await get_file_or_folder_details(sample_tree / "sub" / "b.txt")).to_dict()

    assert data["size_bytes"] == 50
    assert data["size_formatted"] == "50 Bytes"
    assert data["size_kb"] == "0.05"
    assert "total_size_bytes" not in data
