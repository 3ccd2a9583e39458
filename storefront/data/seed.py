# storefront/data/seed.py
from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal
from storefront.data.models.product import ProductModel
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {
        "title": "Running T-shirt",
        "description": "Breathable quick-dry fabric.",
        "price": 24.99,
        "code": "TSH-001",
        "stock": 40,
        "category": "Clothing",
        "thumbnails": [],
    },
    {
        "title": "Training shoes",
        "description": "Stable grip for the gym.",
        "price": 79.99,
        "code": "SHO-001",
        "stock": 15,
        "category": "Footwear",
        "thumbnails": [],
    },
    {
        "title": "Sports backpack",
        "description": "Several compartments, water resistant.",
        "price": 39.99,
        "code": "BAG-001",
        "stock": 25,
        "category": "Accessories",
        "thumbnails": [],
    },
    {
        "title": "Water bottle",
        "description": "750 ml, BPA free.",
        "price": 9.5,
        "code": "ACC-002",
        "stock": 100,
        "category": "Accessories",
        "thumbnails": [],
    },
]


def seed(db: Session | None = None) -> int:
    """Inserts the demo catalog when there are no products yet. Returns how many were added."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if ProductRepo(db).count() > 0:
            return 0
        for data in DEMO_PRODUCTS:
            db.add(ProductModel(status=True, **data))
        db.commit()
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
        return len(DEMO_PRODUCTS)
    finally:
        if own_session:
            db.close()
