import json

import pytest

from buildstamp.info import reset_version_info

SCENARIO = {
    "version": "1.2.0",
    "revision": "abcd123",
    "date": "2024-01-01",
    "user": "alice",
    "url": "scm://repo",
}


@pytest.fixture
def metadata_file(tmp_path):
    path = tmp_path / "build_info.json"
    path.write_text(json.dumps(SCENARIO), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _fresh_default(monkeypatch):
    for var in ("BUILDSTAMP_METADATA_PATH", "BUILDSTAMP_PRODUCT_NAME", "BUILDSTAMP_DOMAIN", "BUILDSTAMP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reset_version_info()
    yield
    reset_version_info()
