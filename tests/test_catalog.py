from modules.inventory.catalog import (
    DEFAULT_ROOMS,
    load_catalog,
    parse_vocabulary,
    room_badge,
)


def test_parse_keeps_declared_order():
    vocab = parse_vocabulary("b:Bee, a:Ay ,c", [])
    assert vocab.ids == ["b", "a", "c"]
    assert vocab.label_for("a") == "Ay"
    assert vocab.label_for("c") == "c"


def test_parse_drops_duplicates_and_blanks():
    vocab = parse_vocabulary("a:One,,a:Two, :Nope,b", [])
    assert vocab.items == (("a", "One"), ("b", "b"))


def test_parse_empty_uses_default():
    assert parse_vocabulary(None, DEFAULT_ROOMS).ids[0] == "yaupon"
    assert parse_vocabulary("   ", DEFAULT_ROOMS).ids == [r for r, _ in DEFAULT_ROOMS]
    assert parse_vocabulary(",,", DEFAULT_ROOMS).ids == [r for r, _ in DEFAULT_ROOMS]


def test_unknown_label_falls_back_to_id():
    assert parse_vocabulary("a:Ay", []).label_for("zz") == "zz"


def test_membership():
    vocab = parse_vocabulary("a,b", [])
    assert "a" in vocab
    assert "z" not in vocab
    assert len(vocab) == 2


def test_room_badge():
    assert room_badge("yaupon") == "blue"
    assert room_badge("ballroom") == "indigo"
    assert room_badge("unknown") == "gray"


def test_load_catalog_from_settings(monkeypatch):
    from core.config import settings

    monkeypatch.setattr(settings, "INVENTORY_REPORTERS", "maria:María,joe:Joe")
    catalog = load_catalog()

    assert catalog.reporters.ids == ["maria", "joe"]
    assert catalog.rooms.ids == [r for r, _ in DEFAULT_ROOMS]
    rooms = catalog.as_dict()["rooms"]
    assert rooms[0] == {"value": "yaupon", "label": "Yaupon", "badge": "blue"}
