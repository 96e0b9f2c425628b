from __future__ import annotations
import logging
import os
from flask import Flask
from config import config_map
from extensions import db, migrate
from blueprints.catalog.store import CatalogStore, get_store

log = logging.getLogger(__name__)

def _seed_from_config(app: Flask) -> None:
    if not app.config.get("SEED_DEMO_DATA"):
        return
    with app.app_context():
        from seed import seed_demo_catalog  # локальный импорт, чтобы избежать циклов
        created = seed_demo_catalog(get_store())
        if created:
            log.info("demo catalog seeded: %d rows", created)

def register_blueprints(app: Flask) -> None:
    from blueprints.core import bp as core_bp
    from blueprints.catalog import bp as catalog_bp

    # core без префикса → '/health' в корне
    app.register_blueprint(core_bp)
    app.register_blueprint(catalog_bp, url_prefix="/api/v1")

def create_app(config_name: str | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    cfg_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config_map[cfg_name])
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)

    db.init_app(app)
    migrate.init_app(app, db)
    store = CatalogStore(db)
    store.init_app(app)
    register_blueprints(app)
    store.open()
    _seed_from_config(app)
    return app

if __name__ == "__main__":
    application = create_app()
    try:
        application.run()
    finally:
        application.extensions["catalog_store"].close()
