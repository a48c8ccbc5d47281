# type: ignore
import pytest


@pytest.fixture
def trace():
    lines = []
    yield lines


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield tmp_path
