"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services avoid SQL strings.
All statements are parameterized; errors propagate as sqlite3.Error.
"""
from __future__ import annotations

