"""Seeds empty collections of any DataRepository with the default dataset.

Idempotent: a collection that already holds records is left alone.
"""

import logging

from app.application.interfaces import DataRepository

from . import default_dataset

logger = logging.getLogger(__name__)


async def seed_empty_collections(repository: DataRepository) -> dict[str, int]:
    """Insert defaults into every empty collection.

    Returns:
        Number of records seeded per collection name.
    """
    seeded: dict[str, int] = {}
    collections = (
        ("bills", repository.bills, default_dataset.default_bills),
        ("top_ups", repository.top_ups, default_dataset.default_top_ups),
        ("facility_usages", repository.facility_usages, default_dataset.default_facility_usages),
        ("packages", repository.packages, default_dataset.default_packages),
    )
    for name, collection, defaults in collections:
        if await collection.get_all():
            continue
        records = defaults()
        for record in records:
            await collection.save(record)
        seeded[name] = len(records)

    if not await repository.users.get_all():
        users = default_dataset.default_users()
        for user in users:
            await repository.users.save(user, is_new=True)
        seeded["users"] = len(users)

    if seeded:
        logger.info("Seeded default data: %s", seeded)
    return seeded
