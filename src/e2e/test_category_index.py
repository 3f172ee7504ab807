# src/e2e/test_category_index.py

from suggest import config as CFG
from suggest.DB.index import CategoryIndex
from suggest.models import Item


def _items():
    return [
        Item("1", "Phone case", 50, "Phones"),
        Item("2", "Pixel 8", 70, "Android", parent_category="Phones"),
        Item("3", "Galaxy S24", 80, "Android", parent_category="Phones"),
        Item("4", "Desk lamp", 30, "Home"),
    ]


def _ids(items):
    return [it.id for it in items]


def test_parent_bucket_contains_children():
    idx = CategoryIndex()
    idx.build(_items())
    assert _ids(idx.get("Phones")) == ["1", "2", "3"]
    assert _ids(idx.get("Android")) == ["2", "3"]
    assert _ids(idx.get("Home")) == ["4"]


def test_unknown_category_is_empty():
    idx = CategoryIndex()
    idx.build(_items())
    assert idx.get("Garden") == ()
    assert idx.get_with_subcategories("Garden") == []
    assert "Garden" not in idx


def test_subcategory_lookup_deduplicates_by_id():
    items = _items() + [Item("5", "Odd one", 10, "Phones", parent_category="Phones")]
    idx = CategoryIndex()
    idx.build(items)
    # item 5 sits twice in the Phones bucket
    assert _ids(idx.get("Phones")).count("5") == 2
    assert _ids(idx.get_with_subcategories("Phones")) == ["1", "2", "3", "5"]


def test_get_many_unions_in_request_order_without_duplicates():
    idx = CategoryIndex()
    idx.build(_items())
    assert _ids(idx.get_many(["Home", "Android", "Phones"])) == ["4", "2", "3", "1"]


def test_extend_appends_to_own_and_parent_bucket():
    idx = CategoryIndex()
    idx.build(_items())
    idx.extend(Item("9", "Pixel Fold", 60, "Android", parent_category="Phones"))
    assert _ids(idx.get("Android"))[-1] == "9"
    assert _ids(idx.get("Phones"))[-1] == "9"


def test_rebuild_replaces_previous_buckets():
    idx = CategoryIndex()
    idx.build(_items())
    idx.build([Item("x", "Only", 1, "Solo")])
    assert idx.categories() == ["Solo"]
    assert len(idx) == 1


def test_bucket_sizes():
    idx = CategoryIndex()
    idx.build(_items())
    sizes = {c.category: c.count for c in idx.bucket_sizes()}
    assert sizes == {"Phones": 3, "Android": 2, "Home": 1}


def test_parent_equal_to_own_category_is_indexed_once():
    idx = CategoryIndex()
    idx.build([Item("5", "Phone grip", 50, "Phones", parent_category="Phones")])
    idx.extend(Item("6", "Phone ring", 40, "Phones", parent_category="Phones"))
    assert _ids(idx.get("Phones")) == ["5", "6"]


def test_verbose_flag_is_read_at_build_time(monkeypatch, capsys):
    monkeypatch.setattr(CFG, "VERBOSE", False)
    idx = CategoryIndex()
    idx.build(_items())
    assert "[index]" not in capsys.readouterr().out
    monkeypatch.setattr(CFG, "VERBOSE", True)
    idx.build(_items())
    assert "[index] items=4 categories=3" in capsys.readouterr().out
