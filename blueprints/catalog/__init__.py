from flask import Blueprint

# url_prefix задаётся при регистрации: app.register_blueprint(bp, url_prefix="/api/v1")
bp = Blueprint("catalog", __name__)

from . import routes  # noqa: E402,F401
