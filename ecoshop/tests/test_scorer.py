from __future__ import annotations

from ecoshop.catalog.models import ProductOut
from ecoshop.recommendations.scorer import ScoreWeights, rank_products, score_catalog


def _product(pid: str, category: str, score: float) -> ProductOut:
    return ProductOut(
        id=pid,
        name=f"Product {pid}",
        category=category,
        sustainability_score=score,
        price=100.0,
        currency="INR",
        image_url=f"https://img.example/{pid}.jpg",
    )


CATALOG = [_product("1", "A", 5), _product("2", "B", 8)]


def _ids(ranked):
    return [p.id for p, _ in ranked]


# ── Scenarios ────────────────────────────────────────────────────────────


def test_no_preferences_orders_by_sustainability_score():
    assert _ids(rank_products(CATALOG, [], [], [])) == ["2", "1"]


def test_preferred_category_adds_two():
    ranked = rank_products(CATALOG, [], [], ["A"])
    assert _ids(ranked) == ["2", "1"]
    assert dict((p.id, s) for p, s in ranked) == {"2": 8.0, "1": 7.0}


def test_liked_product_is_excluded():
    assert _ids(rank_products(CATALOG, ["1"], [], ["A"])) == ["2"]


def test_empty_catalog_returns_empty_list():
    assert rank_products([], ["1"], ["2"], ["A"]) == []


def test_zero_limit_returns_empty_list():
    assert rank_products(CATALOG, [], [], [], limit=0) == []


# ── Scoring ──────────────────────────────────────────────────────────────


def test_score_components():
    catalog = [
        _product("a", "X", 1.0),
        _product("b", "X", 1.0),
        _product("c", "Y", 1.0),
        _product("d", "Y", 1.0),
    ]
    df = score_catalog(catalog, liked={"a"}, disliked={"d"}, preferred_categories={"X"})
    assert df["_score"].tolist() == [6.0, 3.0, 1.0, -2.0]


def test_custom_weights():
    df = score_catalog(
        CATALOG, liked=[], disliked=[], preferred_categories=["B"],
        weights=ScoreWeights(category=10.0, liked=0.0, disliked=0.0),
    )
    assert df["_score"].tolist() == [5.0, 18.0]


def test_preferred_category_can_overtake_higher_base():
    catalog = [_product("1", "A", 7), _product("2", "B", 8)]
    assert _ids(rank_products(catalog, [], [], ["A"])) == ["1", "2"]


# ── Properties ───────────────────────────────────────────────────────────


def test_result_capped_at_ten():
    catalog = [_product(str(i), "A", i) for i in range(25)]
    ranked = rank_products(catalog, [], [], [])
    assert len(ranked) == 10
    assert _ids(ranked) == [str(i) for i in range(24, 14, -1)]


def test_result_never_longer_than_catalog():
    assert len(rank_products(CATALOG, [], [], [], limit=10)) == 2


def test_liked_and_disliked_never_returned():
    catalog = [_product(str(i), "A" if i % 2 else "B", i % 5) for i in range(20)]
    liked = {"1", "3", "8"}
    disliked = {"2", "4", "19"}
    ranked = rank_products(catalog, liked, disliked, ["A"])
    returned = set(_ids(ranked))
    assert not returned & liked
    assert not returned & disliked


def test_sorted_descending():
    catalog = [_product(str(i), "A" if i % 3 else "B", (i * 7) % 11) for i in range(30)]
    scores = [s for _, s in rank_products(catalog, ["4"], ["5"], ["B"])]
    assert scores == sorted(scores, reverse=True)


def test_ties_keep_catalog_order():
    catalog = [
        _product("z", "A", 3),
        _product("m", "A", 5),
        _product("a", "A", 3),
        _product("q", "A", 3),
    ]
    assert _ids(rank_products(catalog, [], [], [])) == ["m", "z", "a", "q"]


def test_deterministic_for_same_inputs():
    catalog = [_product(str(i), "A" if i % 2 else "B", i % 4) for i in range(15)]
    first = rank_products(catalog, ["3"], ["6"], ["B"])
    second = rank_products(catalog, ["3"], ["6"], ["B"])
    assert first == second
