import asyncio
from datetime import date

import pytest

from conftest import make_doc

from inkwell.aggregator.aggregator import collect_all, collect_category, find_post, sort_posts
from inkwell.sources.base import CATEGORIES
from inkwell.sources.fetcher import FetchResponse


def _post(pid, date_, category="poetry"):
    return {"id": pid, "category": category, "date": date_}


def test_sort_is_descending_by_date():
    posts = [_post("a", "2024-01-01"), _post("b", "2024-03-01"), _post("c", "2023-12-31")]
    assert [p["id"] for p in sort_posts(posts)] == ["b", "a", "c"]


def test_sort_is_stable_for_equal_dates():
    posts = [_post("a", "2024-01-01"), _post("b", "2024-01-01"), _post("c", "2024-02-01"), _post("d", "2024-01-01")]
    assert [p["id"] for p in sort_posts(posts)] == ["c", "a", "b", "d"]


def test_unparseable_dates_sort_as_today():
    posts = [
        _post("old", "2020-01-01"),
        _post("future", "2030-01-01"),
        _post("junk", "not a date"),
    ]
    ordered = sort_posts(posts, today=date(2024, 6, 1))
    assert [p["id"] for p in ordered] == ["future", "junk", "old"]


def test_sort_mixes_naive_and_aware_dates():
    posts = [_post("aware", "2024-01-02T10:00:00+02:00"), _post("naive", "2024-01-02"), _post("late", "2024-01-02T23:00:00Z")]
    assert [p["id"] for p in sort_posts(posts)] == ["late", "aware", "naive"]


def test_scenario_c_feed_orders_across_documents(fake_fetcher):
    fetcher = fake_fetcher({"poetry": {
        "jan.md": make_doc("January", "2024-01-01"),
        "mar.md": make_doc("March", "2024-03-01"),
    }})
    posts = asyncio.run(collect_all(fetcher))
    assert [p["id"] for p in posts] == ["mar", "jan"]


def test_collect_all_merges_categories_with_declaration_tiebreak(fake_fetcher):
    fetcher = fake_fetcher({
        "poetry": {"p.md": make_doc("P", "2024-01-01")},
        "sentiment": {"s.md": make_doc(date_="2024-01-01", body="feel")},
        "stories": {"t.md": make_doc("T", "2024-05-01")},
        "prompts": {"q.md": make_doc("Q", "2024-01-01")},
    })
    posts = asyncio.run(collect_all(fetcher))
    assert [(p["category"], p["id"]) for p in posts] == [
        ("stories", "t"),
        ("poetry", "p"),
        ("sentiment", "s"),
        ("prompts", "q"),
    ]


def test_collect_all_survives_a_failing_category(fake_fetcher):
    fetcher = fake_fetcher(
        {
            "poetry": {"p.md": make_doc("P", "2024-01-01")},
            "stories": {"t.md": make_doc("T", "2024-01-02")},
        },
        fail={"posts/poetry/"},
    )
    posts = asyncio.run(collect_all(fetcher))
    assert [p["id"] for p in posts] == ["t"]


def test_collect_all_returns_empty_list_when_nothing_found(fake_fetcher):
    assert asyncio.run(collect_all(fake_fetcher({}))) == []


def test_collect_all_restricted_categories(fake_fetcher):
    fetcher = fake_fetcher({
        "poetry": {"p.md": make_doc("P", "2024-01-01")},
        "stories": {"t.md": make_doc("T", "2024-01-02")},
    })
    posts = asyncio.run(collect_all(fetcher, ["poetry"]))
    assert [p["id"] for p in posts] == ["p"]
    assert not any(c.startswith("posts/stories") for c in fetcher.calls)


def test_collect_category_sorts(fake_fetcher):
    fetcher = fake_fetcher({"stories": {
        "a.md": make_doc("A", "2022-01-01"),
        "b.md": make_doc("B", "2023-01-01"),
    }})
    posts = asyncio.run(collect_category("stories", fetcher))
    assert [p["id"] for p in posts] == ["b", "a"]


def test_collect_category_rejects_unknown_category(fake_fetcher):
    with pytest.raises(ValueError):
        asyncio.run(collect_category("essays", fake_fetcher({})))


def test_find_post_last_duplicate_wins(monkeypatch, fake_fetcher):
    async def fake_fetch(category, fetcher, *, site=None):
        return [
            {"id": "tale", "title": "First", "date": "2024-01-01"},
            {"id": "other", "title": "Other", "date": "2024-01-01"},
            {"id": "tale", "title": "Second", "date": "2023-01-01"},
        ]

    monkeypatch.setattr("inkwell.aggregator.aggregator.fetch_markdown_files", fake_fetch)
    fetcher = fake_fetcher({})
    assert asyncio.run(find_post("stories", "tale", fetcher))["title"] == "Second"
    assert asyncio.run(find_post("stories", "missing", fetcher)) is None


class _GatedFetcher:
    """Each listing request blocks until every category has asked for its listing."""

    def __init__(self, categories):
        self.categories = set(categories)
        self.listings_started = []
        self.listings_served = []
        self.all_started = None

    async def get(self, path):
        category = path.split("/")[1]
        if not path.endswith("/"):
            return FetchResponse(200, make_doc(category.title(), "2024-01-01"))
        self.listings_started.append(category)
        if set(self.listings_started) >= self.categories:
            self.all_started.set()
        # a sequential caller would sit here until the timeout
        await asyncio.wait_for(self.all_started.wait(), timeout=0.5)
        self.listings_served.append(category)
        return FetchResponse(200, f'<a href="{category}.md">{category}</a>')


def test_collect_all_fetches_categories_concurrently():
    fetcher = _GatedFetcher(CATEGORIES)

    async def run():
        fetcher.all_started = asyncio.Event()
        return await collect_all(fetcher)

    posts = asyncio.run(run())
    assert sorted(fetcher.listings_served) == sorted(CATEGORIES)
    # equal dates: declaration order survives the join
    assert [p["category"] for p in posts] == list(CATEGORIES)
