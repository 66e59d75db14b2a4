from __future__ import annotations

import re
from pathlib import Path

from scripts.init_db import DISPATCH_TABLES

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_creates_every_dispatch_table():
    created = re.findall(r"CREATE TABLE IF NOT EXISTS (\w+)", SCHEMA.read_text(encoding="utf-8"))

    assert sorted(created) == sorted(DISPATCH_TABLES)
