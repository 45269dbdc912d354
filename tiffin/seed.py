"""
Demo Data

Loads the demo accounts and dish catalogue into a store. Used at startup
when SEED_DEMO_DATA is enabled, and by the test suite.

Demo credentials (password: "password"):
    - Customer: user@test.com
    - Admin: admin@tiffin.com
    - Delivery: john@delivery.com
"""

import logging
from dataclasses import replace

from tiffin.core.security import hash_password
from tiffin.models import Dish, Role
from tiffin.store import DataStore

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_USERS = [
    {"name": "Test User", "email": "user@test.com", "phone": "+1234567890", "role": Role.CUSTOMER},
    {"name": "Admin User", "email": "admin@tiffin.com", "phone": "+1234567891", "role": Role.ADMIN},
    {"name": "John Delivery", "email": "john@delivery.com", "phone": "+1234567892", "role": Role.DELIVERY_PARTNER},
]

DEMO_DISHES = [
    Dish(
        id=1,
        name="Chicken Biryani",
        description="Aromatic basmati rice with tender chicken pieces",
        price=15.99,
        category="MAIN_COURSE",
        is_vegetarian=False,
        image_url="/assets/images/dishes/chicken-biryani.jpg",
        preparation_time=25,
        spice_level="MEDIUM",
    ),
    Dish(
        id=2,
        name="Vegetable Curry",
        description="Mixed vegetables in rich curry sauce",
        price=12.99,
        category="MAIN_COURSE",
        is_vegetarian=True,
        image_url="/assets/images/dishes/veg-curry.jpg",
        preparation_time=20,
        spice_level="MILD",
    ),
    Dish(
        id=3,
        name="Dal Tadka",
        description="Yellow lentils with tempered spices",
        price=8.99,
        category="MAIN_COURSE",
        is_vegetarian=True,
        image_url="/assets/images/dishes/dal-tadka.jpg",
        preparation_time=15,
        spice_level="MILD",
    ),
    Dish(
        id=4,
        name="Masala Dosa",
        description="Crispy rice crepe with spiced potato filling",
        price=10.99,
        category="BREAKFAST",
        is_vegetarian=True,
        image_url="/assets/images/dishes/masala-dosa.jpg",
        preparation_time=15,
        spice_level="MEDIUM",
    ),
]


def seed_demo_data(store: DataStore) -> DataStore:
    """Populate ``store`` with the demo users and dishes."""
    digest = hash_password(DEMO_PASSWORD)
    for account in DEMO_USERS:
        store.users.add(password_hash=digest, **account)

    for dish in DEMO_DISHES:
        # Copies keep the module-level catalogue pristine across stores
        store.dishes.add(replace(dish))

    logger.info(
        f"Seeded {len(DEMO_USERS)} demo users and {len(DEMO_DISHES)} dishes"
    )
    return store
