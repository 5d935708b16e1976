"""Shared fixtures for fieldmap tests.

Go sources are written into pytest's tmp_path so the loader, the
aggregator and the CLI run against real files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


# ---------------------------------------------------------------------------
# Sample sources
# ---------------------------------------------------------------------------

USER_GO = """\
package model

import (
	"time"

	sqlc "example.com/app/db/sqlc"
)

// User is an account.
type User struct {
	Name     string `json:"name"`
	id       string `json:"identifier"`
	Internal string
	Created  time.Time `json:"created_at,omitempty" db:"created"`
	sqlc.Base
}
"""

ORDER_GO = """\
package model

type Order struct {
	ID     int64  `json:"id"`
	Name   string `json:"order_name"`
	Total  float64 `json:"total"`
}
"""

BROKEN_GO = """\
package model

type Broken struct {
	Name string `json:"name"`
"""


# ---------------------------------------------------------------------------
# File writer: creates Go files under tmp_path
# ---------------------------------------------------------------------------

@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a callable that writes a Go source file and returns its path.

    Usage in tests::

        path = write_go("models/user.go", USER_GO)
    """
    def _write(name: str, source: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def chdir_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from inside tmp_path so relative defaults land there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
