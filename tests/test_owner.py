import pytest

from fswin import owner
from fswin.owner import resolve_owner


@pytest.mark.asyncio
async def test_non_windows_returns_na(fake_powershell, monkeypatch):
    monkeypatch.setattr(owner, "IS_WINDOWS", False)
    assert await resolve_owner("C:\\Windows") == "N/A"
    assert fake_powershell.calls == []


@pytest.mark.asyncio
async def test_owner_from_powershell(fake_powershell, monkeypatch):
    monkeypatch.setattr(owner, "IS_WINDOWS", True)
    fake_powershell.responses["GetAccessControl"] = "BUILTIN\\Administrators\r\n"

    assert await resolve_owner("C:\\Program Files\\It's here") == "BUILTIN\\Administrators"
    assert "'C:\\Program Files\\It''s here'" in fake_powershell.calls[0]


@pytest.mark.asyncio
async def test_powershell_failure_returns_na(fake_powershell, monkeypatch):
    monkeypatch.setattr(owner, "IS_WINDOWS", True)
    fake_powershell.responses["GetAccessControl"] = None
    assert await resolve_owner("C:\\pagefile.sys") == "N/A"
