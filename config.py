from __future__ import annotations
import os
from pathlib import Path

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    BASE_DIR = Path(__file__).resolve().parent
    # SQLite file in project directory
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'catalog.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False
    JSON_LOG = True
    # create tables when the store opens (no alembic run needed)
    CATALOG_AUTO_CREATE = False
    # False keeps the historical behaviour: a major without categories answers 404 on delete
    CATALOG_ALLOW_EMPTY_MAJOR_DELETE = os.getenv("CATALOG_ALLOW_EMPTY_MAJOR_DELETE", "0") == "1"
    SEED_DEMO_DATA = False

class DevConfig(BaseConfig):
    DEBUG = True
    CATALOG_AUTO_CREATE = True
    SEED_DEMO_DATA = True

class TestConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JSON_LOG = False
    CATALOG_AUTO_CREATE = True
    CATALOG_ALLOW_EMPTY_MAJOR_DELETE = False

class ProdConfig(BaseConfig):
    DEBUG = False
    SEED_DEMO_DATA = False

config_map = {
    "dev": DevConfig,
    "test": TestConfig,
    "prod": ProdConfig,
    "default": DevConfig,
}
