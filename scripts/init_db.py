#!/usr/bin/env python3
"""
Create database tables and optionally seed a demo restaurant menu.

Usage:
    python scripts/init_db.py            # tables only
    python scripts/init_db.py --seed     # tables + demo menu
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from domain.models import (
    SessionLocal,
    engine,
    init_database,
    MenuCategory,
    MenuItem,
    Restaurant,
)
from repositories import RestaurantRepository

logger = logging.getLogger("jinaq.init_db")

DEMO_SLUG = "jinaq-demo"
DEMO_MENU = {
    "Mains": [
        ("Bibimbap", "Rice bowl with vegetables, egg and gochujang", 12000),
        ("Bulgogi", "Marinated grilled beef", 18000),
    ],
    "Sides": [
        ("Kimchi", "House-fermented napa cabbage", 3000),
    ],
    "Drinks": [
        ("Sikhye", "Sweet rice punch", 4000),
        ("Barley tea", None, 2000),
    ],
}


def seed_demo_menu(db: Session) -> Restaurant:
    """Insert the demo restaurant and its menu unless it already exists."""
    repo = RestaurantRepository(db)
    existing = repo.get_by_slug(DEMO_SLUG)
    if existing is not None:
        logger.info(f"Demo restaurant already present: {existing.restaurant_id}")
        return existing

    restaurant = Restaurant(name="JINAQ Demo Kitchen", slug=DEMO_SLUG, currency="KRW")
    for c_pos, (category_name, items) in enumerate(DEMO_MENU.items()):
        category = MenuCategory(name=category_name, position=c_pos)
        restaurant.categories.append(category)
        for i_pos, (name, description, price) in enumerate(items):
            restaurant.items.append(
                MenuItem(
                    category=category,
                    name=name,
                    description=description,
                    price=price,
                    position=i_pos,
                )
            )

    # Categories and items cascade from the restaurant in one commit
    restaurant = repo.create(restaurant)
    logger.info(f"Seeded demo restaurant {restaurant.restaurant_id}")
    return restaurant


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the JINAQ database")
    parser.add_argument("--seed", action="store_true", help="Insert a demo menu")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        init_database()
        tables = inspect(engine).get_table_names()
        logger.info(f"Tables ready ({len(tables)}): {', '.join(tables)}")

        if args.seed:
            with SessionLocal() as db:
                restaurant = seed_demo_menu(db)
            print(f"Demo menu: GET /api/v1/menu/{restaurant.restaurant_id}")
    except Exception:
        logger.exception("Database initialization failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
