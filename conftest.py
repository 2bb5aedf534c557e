# Ensure project root is on sys.path for tests
import sys, pathlib
import pytest

root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    # Never read or write the real ~/.herobattle_settings.json from tests
    path = tmp_path / "settings.json"
    monkeypatch.setenv("HEROBATTLE_SETTINGS", str(path))
    return path
