# scripts/dev_db_init.py
from __future__ import annotations
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import create_app
from extensions import db
from seed import seed_demo_catalog

if __name__ == "__main__":
    app = create_app("dev")
    store = app.extensions["catalog_store"]
    try:
        with app.app_context():
            db.create_all()
            seed_demo_catalog(store)
        print("DB initialized and seeded ✅")
    finally:
        store.close()
