from __future__ import annotations

import csv
from collections.abc import Iterator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient


# Ensure `import plusgrid.*` works when pytest chooses an import mode that
# doesn't automatically add the project root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


DATA_DIR = Path(__file__).resolve().parent / "data"


def load_csv(name: str, keys: list[str]) -> list[dict[str, str]]:
    """Load a fixture table from tests/data, skipping comments and blank lines."""

    rows: list[dict[str, str]] = []
    with (DATA_DIR / name).open(encoding="utf-8", newline="") as fh:
        for line in csv.reader(fh):
            if not line or line[0].startswith("#"):
                continue
            rows.append(dict(zip(keys, line)))
    assert rows, f"no rows in {name}"
    return rows


def as_bool(value: str) -> bool:
    return value.strip().lower() == "true"


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    # Deterministic settings regardless of the caller's environment.
    monkeypatch.setenv("PLUSGRID_DEFAULT_CODE_LENGTH", "10")
    monkeypatch.setenv("PLUSGRID_DEFAULT_MAXIMUM_TRUNCATION", "4")
    monkeypatch.setenv("PLUSGRID_MAX_BATCH_ITEMS", "5")
    monkeypatch.setenv("PLUSGRID_LOG_LEVEL", "WARNING")

    from plusgrid.core.settings import get_settings

    get_settings.cache_clear()

    from plusgrid.main import create_app

    app = create_app()
    yield TestClient(app)

    get_settings.cache_clear()
