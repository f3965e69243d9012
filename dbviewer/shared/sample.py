"""Sample dataset provisioning.

Materialises a small six-table shop schema with deterministic seed rows. Used
on first start-up and by the ``sample`` / ``load-sample`` commands.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Sequence

from .exceptions import ProvisionFailure

SCHEMA_PACKAGE = "dbviewer.shared"
SCHEMA_RESOURCE = "sample_schema.sql"
SEED_ROW_COUNT = 40

SAMPLE_TABLES = ("users", "products", "orders", "categories", "reviews", "inventory")
PRODUCT_CATEGORIES = ("Electronics", "Books", "Clothing")
INVENTORY_LOCATIONS = ("Warehouse A", "Store B", "Online")


@dataclass(frozen=True, slots=True)
class SeedTable:
    table: str
    insert_sql: str
    row_for: Callable[[int], tuple[Any, ...]]

    def rows(self, count: int = SEED_ROW_COUNT) -> list[tuple[Any, ...]]:
        return [self.row_for(i) for i in range(1, count + 1)]


SEED_TABLES: Sequence[SeedTable] = (
    SeedTable(
        "users",
        "INSERT INTO users (name, email, age) VALUES (?, ?, ?)",
        lambda i: (f"User {i}", f"user{i}@example.com", 20 + (i % 50)),
    ),
    SeedTable(
        "products",
        "INSERT INTO products (name, price, category, stock) VALUES (?, ?, ?, ?)",
        lambda i: (f"Product {i}", 10 + i * 5, PRODUCT_CATEGORIES[i % 3], 50 + i * 2),
    ),
    SeedTable(
        "orders",
        "INSERT INTO orders (user_id, product_id, quantity, total_amount) VALUES (?, ?, ?, ?)",
        lambda i: (1 + (i % 40), 1 + (i % 40), 1 + (i % 10), 100 + i * 10),
    ),
    SeedTable(
        "categories",
        "INSERT INTO categories (name, description) VALUES (?, ?)",
        lambda i: (f"Category {i}", f"Description for category {i}"),
    ),
    SeedTable(
        "reviews",
        "INSERT INTO reviews (product_id, user_id, rating, comment) VALUES (?, ?, ?, ?)",
        lambda i: (1 + (i % 40), 1 + (i % 40), 1 + (i % 5), f"Review comment {i}"),
    ),
    SeedTable(
        "inventory",
        "INSERT INTO inventory (product_id, location, quantity) VALUES (?, ?, ?)",
        lambda i: (1 + (i % 40), INVENTORY_LOCATIONS[i % 3], 100 + i * 3),
    ),
)


def _load_schema() -> str:
    return resources.files(SCHEMA_PACKAGE).joinpath(SCHEMA_RESOURCE).read_text(encoding="utf-8")


def ensure_sample(path: str | Path) -> Path:
    """Create the sample database at ``path`` unless a file already exists there.

    An existing file is returned as-is, whatever it contains. A failure part-way
    through leaves the partial file behind; callers should treat it as corrupt.
    """
    db_path = Path(path)
    if db_path.exists():
        return db_path

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        connection = sqlite3.connect(db_path)
    except (OSError, ValueError, sqlite3.Error) as exc:
        raise ProvisionFailure(f"Unable to create sample database at {db_path}: {exc}") from exc

    try:
        connection.execute("PRAGMA foreign_keys = ON;")
        connection.executescript(_load_schema())
        for seed in SEED_TABLES:
            connection.executemany(seed.insert_sql, seed.rows())
        connection.commit()
    except (OSError, sqlite3.Error) as exc:
        raise ProvisionFailure(f"Failed to populate sample database at {db_path}: {exc}") from exc
    finally:
        connection.close()
    return db_path
