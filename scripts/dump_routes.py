# scripts/dump_routes.py
# Usage:
#   python scripts/dump_routes.py [out_file]
# or:
#   python -m scripts.dump_routes [out_file]
from __future__ import annotations

import sys
import json
from pathlib import Path

# --- ensure project root on sys.path ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

API_PREFIX = "/api/"
HTTP_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}

def collect_routes(app):
    """Маршруты каталога под /api/: одна строка на URL, методы всех правил объединены."""
    by_url = {}
    for rule in app.url_map.iter_rules():
        if not rule.rule.startswith(API_PREFIX):
            continue
        row = by_url.setdefault(rule.rule, {"url": rule.rule, "endpoints": set(), "methods": set()})
        row["endpoints"].add(rule.endpoint)
        row["methods"].update(m for m in (rule.methods or []) if m in HTTP_METHODS)
    rows = [
        {"url": r["url"], "endpoint": ",".join(sorted(r["endpoints"])), "methods": sorted(r["methods"])}
        for r in by_url.values()
    ]
    rows.sort(key=lambda r: r["url"])
    return rows

def main():
    from app import create_app

    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("api_routes.txt")
    app = create_app("prod")
    try:
        rows = collect_routes(app)
    finally:
        app.extensions["catalog_store"].close()
    out.parent.mkdir(parents=True, exist_ok=True)
    if out.suffix.lower() == ".json":
        out.write_text(json.dumps(rows, ensure_ascii=False, indent=2), encoding="utf-8")
    else:
        lines = [f"{','.join(r['methods']):<18} {r['url']:<45} {r['endpoint']}" for r in rows]
        out.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print(f"Saved {len(rows)} API routes to {out}")

if __name__ == "__main__":
    main()
