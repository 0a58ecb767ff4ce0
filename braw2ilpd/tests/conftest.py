import pytest

from braw2ilpd.tests import fakes


@pytest.fixture
def sample_values():
    return fakes.sample_attributes()


@pytest.fixture
def fake_clip(sample_values):
    return fakes.FakeImmersiveClip(sample_values)


@pytest.fixture
def fake_backend(monkeypatch):
    """Reset the import-path backend to the sample clip for each test."""
    monkeypatch.setitem(fakes.BACKEND_STATE, 'values', None)
    monkeypatch.setitem(fakes.BACKEND_STATE, 'immersive', True)
    monkeypatch.setitem(fakes.BACKEND_STATE, 'open_fails', False)
    return fakes.BACKEND_STATE


@pytest.fixture
def clip_file(tmp_path):
    """An input clip path that exists on disk."""
    path = tmp_path / "clip001.braw"
    path.write_bytes(b"\x00" * 16)
    return path
