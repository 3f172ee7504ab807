from __future__ import annotations
import argparse, json, logging
from typing import Any, Dict, List
from .engine import Engine
from .loader import load_catalog
from .models import RankedResult, SearchOptions
from . import config as CFG


def _row(r: RankedResult) -> Dict[str, Any]:
    return {
        "id": r.item.id,
        "text": r.item.text,
        "category": r.item.category,
        "popularity": r.item.popularity,
        "match_type": r.match_type.value,
        "raw_score": r.raw_score,
        "final_score": round(r.final_score, 4),
    }


def _print_table(rows: List[RankedResult]) -> None:
    if not rows:
        print("(no matches)"); return
    print("#  Score    Match              Category         Text")
    for i, r in enumerate(rows, 1):
        print(f"{i:<2} {r.final_score:<8.2f} {r.match_type.value:<18} {r.item.category[:16]:<16} {r.item.text}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Suggestion search CLI (Engine-backed)")
    p.add_argument("--catalog", required=True, help="Catalog file (.json array or .jsonl)")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("-n", "--top-n", type=int, default=CFG.TOP_N, help="Results per query")
    p.add_argument("--category", default=None, help="Restrict to one category")
    p.add_argument("--categories", nargs="+", default=None, help="Restrict to several categories")
    p.add_argument("--sub", action="store_true", help="Include subcategories of --category")
    p.add_argument("--min-score", type=float, default=CFG.MIN_RAW_SCORE, help="Raw score threshold")
    p.add_argument("--no-phonetic", action="store_true", help="Disable pinyin matching")
    p.add_argument("--no-fuzzy", action="store_true", help="Disable fuzzy matching")
    p.add_argument("--stats", action="store_true", help="Also print per-category counts")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)
        CFG.VERBOSE = True

    try:
        items = load_catalog(args.catalog)
    except (OSError, ValueError) as exc:
        p.error(f"cannot load catalog: {exc}")

    eng = Engine(items, {
        "top_n": args.top_n,
        "min_raw_score": args.min_score,
        "enable_phonetic": not args.no_phonetic,
        "enable_fuzzy": not args.no_fuzzy,
    })
    opts = SearchOptions(
        category=args.category,
        categories=tuple(args.categories) if args.categories else None,
        include_subcategories=args.sub,
    )

    def run_query(q: str) -> None:
        if args.stats:
            out = eng.search_with_category_stats(q, opts)
            rows, stats = list(out.results), out.category_stats
        else:
            rows, stats = list(eng.search(q, opts)), None
        if args.json:
            payload: Any = [_row(r) for r in rows]
            if stats is not None:
                payload = {"results": payload,
                           "category_stats": [{"category": c.category, "count": c.count} for c in stats]}
            print(json.dumps(payload, ensure_ascii=False, indent=2))
            return
        _print_table(rows)
        if stats:
            print("-- categories: " + ", ".join(f"{c.category} ({c.count})" for c in stats))

    if args.q is not None:
        run_query(args.q)

    if args.repl:
        print("Type a query (empty line to exit).")
        while True:
            try:
                q = input("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not q.strip():
                break
            run_query(q)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
