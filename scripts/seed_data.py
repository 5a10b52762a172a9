"""
Seed default categories, warehouses and an admin account.

Safe to re-run: existing rows (matched by name / email) are left untouched.

    python scripts/seed_data.py
"""
import os
import sys

sys.path.append(os.getcwd())

from stockflow.core import get_settings, Base, create_db_engine, create_session_factory
from stockflow.models import Category, Warehouse, AppUser
from stockflow.api.auth import get_password_hash

CATEGORIES = [
    ("Electronics", "Electronic devices and accessories"),
    ("Furniture", "Office and home furniture"),
    ("Stationery", "Office supplies and stationery items"),
    ("Food & Beverages", "Food items and beverages"),
    ("Clothing", "Apparel and accessories"),
]

WAREHOUSES = [
    ("Main Warehouse", "New York, NY"),
    ("West Coast Hub", "Los Angeles, CA"),
    ("Central Distribution", "Chicago, IL"),
    ("East Coast Facility", "Boston, MA"),
]


def seed(db, admin_email: str, admin_password: str) -> dict:
    """Insert whatever is missing; returns counts of created rows"""
    created = {"categories": 0, "warehouses": 0, "users": 0}

    for name, description in CATEGORIES:
        if not db.query(Category).filter(Category.name == name).first():
            db.add(Category(name=name, description=description))
            created["categories"] += 1

    for name, location in WAREHOUSES:
        if not db.query(Warehouse).filter(Warehouse.name == name).first():
            db.add(Warehouse(name=name, location=location, is_active=True))
            created["warehouses"] += 1

    if not db.query(AppUser).filter(AppUser.email == admin_email).first():
        db.add(AppUser(
            email=admin_email,
            name="Administrator",
            hashed_password=get_password_hash(admin_password),
            role="admin",
            is_active=True
        ))
        created["users"] += 1

    db.commit()
    return created


def main():
    settings = get_settings()
    engine = create_db_engine(settings)
    Base.metadata.create_all(bind=engine)
    db = create_session_factory(engine, settings)()

    admin_email = os.getenv("SEED_ADMIN_EMAIL", "admin@stockflow.io")
    admin_password = os.getenv("SEED_ADMIN_PASSWORD", "Admin@1234")

    try:
        print("Start seeding...")
        created = seed(db, admin_email, admin_password)
        print(f"Created {created['categories']} categories")
        print(f"Created {created['warehouses']} warehouses")
        if created["users"]:
            print(f"Created admin user {admin_email}")
        else:
            print(f"Admin user {admin_email} already exists")
        print("Seeding finished.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
