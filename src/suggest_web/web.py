from __future__ import annotations
import argparse
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, request, jsonify
from suggest import config as CFG
from suggest.engine import Engine
from suggest.loader import load_catalog
from suggest.models import RankedResult, SearchOptions

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None


# ---------- helpers ----------

def highlight_ranges(text: str, query: str) -> List[Tuple[int, int]]:
    """[start, end) spans of case-insensitive occurrences of query in text."""
    q = query.strip()
    if not q:
        return []
    return [m.span() for m in re.finditer(re.escape(q), text, re.IGNORECASE)]


def _row(r: RankedResult, query: str) -> Dict[str, Any]:
    it = r.item
    return {
        "id": it.id,
        "text": it.text,
        "category": it.category,
        "parent_category": it.parent_category,
        "popularity": it.popularity,
        "match_type": r.match_type.value,
        "raw_score": r.raw_score,
        "final_score": r.final_score,
        "highlights": [list(span) for span in highlight_ranges(it.text, query)],
    }


def _options() -> SearchOptions:
    cats = request.args.get("categories", "", type=str)
    return SearchOptions(
        category=request.args.get("category") or None,
        categories=tuple(c.strip() for c in cats.split(",") if c.strip()) or None,
        include_subcategories=request.args.get("sub", "0") in ("1", "true", "yes"),
    )


def _limit() -> Optional[int]:
    raw = request.args.get("k")
    if raw is None or raw == "":
        return None
    k = int(raw)  # ValueError -> 400 via errorhandler
    return max(0, k)


def _require_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("engine not initialized; start with --catalog")
    return _engine


@app.errorhandler(ValueError)
def _bad_request(exc: ValueError):
    return jsonify({"error": f"bad request: {exc}"}), 400


@app.errorhandler(RuntimeError)
def _unavailable(exc: RuntimeError):
    return jsonify({"error": str(exc)}), 503


# ---------- API ----------

@app.get("/api/suggest")
def api_suggest():
    eng = _require_engine()
    q = request.args.get("q", "", type=str)
    k = _limit()
    rows = list(eng.search(q, _options()))
    if k is not None:
        rows = rows[:k]
    return jsonify([_row(r, q) for r in rows])


@app.get("/api/suggest/stats")
def api_suggest_stats():
    eng = _require_engine()
    q = request.args.get("q", "", type=str)
    k = _limit()
    out = eng.search_with_category_stats(q, _options())
    rows = list(out.results)
    if k is not None:
        rows = rows[:k]
    return jsonify({
        "results": [_row(r, q) for r in rows],
        "category_stats": [{"category": c.category, "count": c.count} for c in out.category_stats],
    })


@app.get("/api/stats")
def api_stats():
    st = _require_engine().stats()
    return jsonify({
        "total_items": st.total_items,
        "total_categories": st.total_categories,
        "cache_size": st.cache_size,
        "cache_hits": st.cache_hits,
        "cache_misses": st.cache_misses,
        "categories": [{"category": c.category, "count": c.count} for c in st.categories],
    })


@app.get("/api/config")
def api_config():
    cfg = _require_engine().config
    # debounce_millis is for the client; the engine never reads it
    return jsonify({
        "top_n": cfg.top_n,
        "debounce_millis": cfg.debounce_millis,
        "enable_phonetic": cfg.enable_phonetic,
        "enable_fuzzy": cfg.enable_fuzzy,
    })


@app.get("/health")
def health():
    if _engine is None:
        return jsonify({"status": "starting"}), 503
    return jsonify({"status": "ok", "items": _engine.stats().total_items})


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Flask suggestion API on top of Engine")
    ap.add_argument("--catalog", required=True, help="Catalog file (.json array or .jsonl)")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)
        CFG.VERBOSE = True

    global _engine
    _engine = Engine(load_catalog(args.catalog))
    log.info("Serving %d items on %s:%d", _engine.stats().total_items, args.host, args.port)
    app.run(host=args.host, port=args.port, debug=args.verbose)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
