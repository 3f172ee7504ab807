from __future__ import annotations
import json
import logging
import os
from typing import Any, Iterable, List, Mapping
from .models import Item

log = logging.getLogger(__name__)

_JSONL_EXTS = (".jsonl", ".ndjson")


def _first(rec: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in rec and rec[k] is not None:
            return rec[k]
    return default


def item_from_record(rec: Mapping[str, Any], pos: int = 0) -> Item:
    """
    Build an Item from one catalog record.
    Accepts both snake_case keys and the camelCase keys of the web catalog
    (hotScore, parentCategory, pinyin, pinyinFirst).
    """
    if not isinstance(rec, Mapping):
        raise ValueError(f"catalog record #{pos} is not an object")
    item_id = _first(rec, "id")
    text = _first(rec, "text")
    if item_id is None or text is None:
        raise ValueError(f"catalog record #{pos} needs both 'id' and 'text'")
    return Item(
        id=str(item_id),
        text=str(text),
        popularity=float(_first(rec, "popularity", "hotScore", default=0)),
        category=str(_first(rec, "category", default="")),
        parent_category=_first(rec, "parent_category", "parentCategory"),
        phonetic=_first(rec, "phonetic", "pinyin"),
        phonetic_initials=_first(rec, "phonetic_initials", "pinyinFirst"),
        description=_first(rec, "description"),
    )


def _iter_records(path: str) -> Iterable[Any]:
    with open(path, "r", encoding="utf-8") as f:
        if path.lower().endswith(_JSONL_EXTS):
            for ln in f:
                ln = ln.strip()
                if ln:
                    yield json.loads(ln)
            return
        data = json.load(f)
    if isinstance(data, Mapping) and "items" in data:
        data = data["items"]
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of items")
    yield from data


def load_catalog(path: str) -> List[Item]:
    """
    Read a catalog from a JSON array file (optionally wrapped as
    {"items": [...]}) or a JSON Lines file (.jsonl / .ndjson).
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    items = [item_from_record(rec, pos) for pos, rec in enumerate(_iter_records(path))]
    log.info("Loaded catalog %s: items=%d", path, len(items))
    return items
