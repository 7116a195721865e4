"""Input adapters that load roster seed data."""

from .seed import (
    SeedError,
    default_seed_path,
    load_seed_file,
    rows_to_players,
    seed_store,
)

__all__ = [
    "SeedError",
    "default_seed_path",
    "load_seed_file",
    "rows_to_players",
    "seed_store",
]
