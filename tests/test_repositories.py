"""
Repository tests against the in-memory SQLite database.
"""

import uuid

from sqlalchemy.orm import Session

from test_fixtures import db_session, make_restaurant, find_item
from domain.models import MenuCategory, MenuItem, Restaurant
from repositories import MenuItemRepository, RestaurantRepository


def test_restaurant_repository_get_by_id_and_slug(db_session: Session):
    restaurant = make_restaurant(db_session)
    repo = RestaurantRepository(db_session)

    assert repo.get_by_id(restaurant.restaurant_id).slug == "seoul-kitchen"
    assert repo.get_by_slug("seoul-kitchen").restaurant_id == restaurant.restaurant_id
    assert repo.get_by_id(uuid.uuid4()) is None
    assert repo.get_by_slug("missing") is None


def test_get_with_menu_loads_relationships(db_session: Session):
    restaurant = make_restaurant(db_session)

    loaded = RestaurantRepository(db_session).get_with_menu(restaurant.restaurant_id)

    assert {c.name for c in loaded.categories} == {"Mains", "Drinks"}
    assert len(loaded.items) == 4


def test_get_with_menu_skips_inactive(db_session: Session):
    restaurant = make_restaurant(db_session, is_active=False)

    assert RestaurantRepository(db_session).get_with_menu(restaurant.restaurant_id) is None


def test_restaurant_create_sets_defaults(db_session: Session):
    repo = RestaurantRepository(db_session)

    created = repo.create(Restaurant(name="Jeju Table", slug="jeju-table"))

    assert isinstance(created.restaurant_id, uuid.UUID)
    assert created.currency == "KRW"
    assert created.is_active is True
    assert created.created_at is not None


def test_menu_item_get_for_restaurant_checks_owner(db_session: Session):
    first = make_restaurant(db_session)
    second = make_restaurant(db_session, name="Busan Grill", slug="busan-grill")
    item = find_item(db_session, first, "Sikhye")
    repo = MenuItemRepository(db_session)

    assert repo.get_for_restaurant(first.restaurant_id, item.item_id) is item
    assert repo.get_for_restaurant(second.restaurant_id, item.item_id) is None


def test_set_image_key_persists(db_session: Session):
    restaurant = make_restaurant(db_session)
    item = find_item(db_session, restaurant, "Bulgogi")
    repo = MenuItemRepository(db_session)

    repo.set_image_key(item, "images/bulgogi.png")
    db_session.expire_all()
    assert repo.get_by_id(item.item_id).image_key == "images/bulgogi.png"

    repo.set_image_key(item, None)
    assert repo.get_by_id(item.item_id).image_key is None



def test_create_cascades_categories_and_items(db_session: Session):
    restaurant = Restaurant(name="Jeonju House", slug="jeonju-house")
    category = MenuCategory(name="Rice", position=0)
    restaurant.categories.append(category)
    restaurant.items.append(MenuItem(category=category, name="Bibimbap", price=11000))

    created = RestaurantRepository(db_session).create(restaurant)

    item = db_session.query(MenuItem).one()
    assert item.restaurant_id == created.restaurant_id
    assert item.category_id == created.categories[0].category_id
