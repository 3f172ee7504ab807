# src/e2e/test_loader.py

import json
from pathlib import Path

import pytest

from suggest.loader import item_from_record, load_catalog


def test_loads_json_array_with_web_catalog_keys(tmp_path: Path):
    p = tmp_path / "catalog.json"
    p.write_text(json.dumps([
        {"id": "1", "text": "iPhone 15 Pro Max", "hotScore": 98, "category": "电子产品",
         "description": "苹果旗舰手机"},
        {"id": 2, "text": "Pixel 8", "popularity": 70, "category": "Android", "parentCategory": "Phones",
         "pinyin": "pixel 8", "pinyinFirst": "p8"},
    ], ensure_ascii=False), encoding="utf-8")

    items = load_catalog(str(p))
    assert [it.id for it in items] == ["1", "2"]
    assert items[0].popularity == 98
    assert items[0].category == "电子产品"
    assert items[0].description == "苹果旗舰手机"
    assert items[0].phonetic is None
    assert items[1].parent_category == "Phones"
    assert (items[1].phonetic, items[1].phonetic_initials) == ("pixel 8", "p8")


def test_loads_wrapped_items_object(tmp_path: Path):
    p = tmp_path / "catalog.json"
    p.write_text(json.dumps({"items": [{"id": "x", "text": "Lamp"}]}), encoding="utf-8")
    items = load_catalog(str(p))
    assert items[0].text == "Lamp"
    assert items[0].popularity == 0
    assert items[0].category == ""


def test_loads_json_lines_and_skips_blank_lines(tmp_path: Path):
    p = tmp_path / "catalog.jsonl"
    p.write_text(
        '{"id": "a", "text": "Alpha", "popularity": 10, "category": "X"}\n'
        "\n"
        '{"id": "b", "text": "Beta", "popularity": 20, "category": "Y"}\n',
        encoding="utf-8",
    )
    assert [it.id for it in load_catalog(str(p))] == ["a", "b"]


def test_record_without_text_is_rejected(tmp_path: Path):
    p = tmp_path / "catalog.json"
    p.write_text(json.dumps([{"id": "1", "text": "ok"}, {"id": "2"}]), encoding="utf-8")
    with pytest.raises(ValueError, match="#1"):
        load_catalog(str(p))


def test_non_array_document_is_rejected(tmp_path: Path):
    p = tmp_path / "catalog.json"
    p.write_text(json.dumps({"id": "1", "text": "lonely"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(p))


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "nope.json"))


def test_item_from_record_rejects_non_objects():
    with pytest.raises(ValueError):
        item_from_record(["1", "text"], 3)
