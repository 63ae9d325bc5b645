"""Default dataset for seeding empty stores."""

from .seeder import seed_empty_collections

__all__ = ["seed_empty_collections"]
