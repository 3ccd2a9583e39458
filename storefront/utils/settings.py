# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

PRODUCTS_PAGE_LIMIT = int(os.getenv("PRODUCTS_PAGE_LIMIT", 10))
VIEW_PAGE_LIMIT = int(os.getenv("VIEW_PAGE_LIMIT", 5))

DB_CONNECT_ATTEMPTS = int(os.getenv("DB_CONNECT_ATTEMPTS", 5))
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "false").lower() in ("1", "true", "yes")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8080))
