#!/usr/bin/env python3
"""
One-off script to regenerate plant tasks against each owner's stored frost date.

Usage (inside the API container):
    python scripts/regenerate_tasks.py            # every owner
    python scripts/regenerate_tasks.py 42         # only user 42
"""
import argparse
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)

from sqlalchemy import select

from frostline.core.exceptions import GenerationFailure
from frostline.db.session import AsyncSessionLocal
from frostline.models.plant import Plant
from frostline.models.user import User
from frostline.services.plant_service import regenerate

logger = logging.getLogger("regenerate_tasks")


async def main(user_id: int | None) -> int:
    failures = 0
    async with AsyncSessionLocal() as db:
        query = select(User.id).order_by(User.id)
        if user_id is not None:
            query = query.where(User.id == user_id)
        user_ids = list((await db.execute(query)).scalars().all())

        for uid in user_ids:
            result = await db.execute(select(Plant.id).where(Plant.user_id == uid).order_by(Plant.id))
            for plant_id in result.scalars().all():
                plant = await db.get(Plant, plant_id, populate_existing=True)
                try:
                    tasks = await regenerate(db, plant)
                    logger.info("user %d plant %d: %d tasks", uid, plant_id, len(tasks))
                except GenerationFailure as exc:
                    failures += 1
                    logger.warning("user %d plant %d: %s", uid, plant_id, exc)
    return failures


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("user_id", nargs="?", type=int, help="only regenerate this owner's plants")
    args = parser.parse_args()

    print("Regenerating tasks...\n")
    failed = asyncio.run(main(args.user_id))
    print(f"\nDone ({failed} failures).")
    sys.exit(1 if failed else 0)
