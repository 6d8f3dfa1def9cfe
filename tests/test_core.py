"""Tests for the feed reader: dedup, tagging, filtering and ordering."""

from datetime import datetime, timezone

import pytest

from conftest import FakeSource, make_entry
from rrss.core import FeedReader, sort_articles
from rrss.exceptions import FilterError
from rrss.filters import FilterRegistry
from rrss.models import Article, FeedLine


def _at(day, hour=0):
    return datetime(2024, 1, day, hour, tzinfo=timezone.utc)


class TestSortArticles:
    def test_ascending_by_date(self):
        articles = [
            Article("c", "c", _at(3)),
            Article("a", "a", _at(1)),
            Article("b", "b", _at(2)),
        ]
        assert [a.title for a in sort_articles(articles)] == ["a", "b", "c"]

    def test_ties_keep_input_order(self):
        articles = [
            Article("late", "1", _at(5)),
            Article("x", "2", _at(1)),
            Article("y", "3", _at(1)),
            Article("z", "4", _at(1)),
        ]
        assert [a.title for a in sort_articles(articles)] == ["x", "y", "z", "late"]


class TestFeedReader:
    def test_drops_seen_entries(self, ledger):
        entries = [make_entry(n) for n in range(5)]
        ledger.mark(entries[1])
        ledger.mark(entries[3])
        reader = FeedReader(FakeSource({"feedA": entries}), ledger)

        articles = reader.collect([FeedLine("feedA")])

        assert len(articles) == 3
        assert [a.link for a in articles] == [entries[n].link for n in (0, 2, 4)]

    def test_tags_follow_feed_list(self, ledger):
        source = FakeSource({
            "feedA": [make_entry(1)],
            "feedB": [make_entry(2)],
            "feedC": [make_entry(3)],
        })
        reader = FeedReader(source, ledger)
        lines = [FeedLine("feedA"), FeedLine("feedB", ("tag1", "tag2")), FeedLine("feedC", ("tag1", "tag2"))]

        by_link = {a.link: a.tags for a in reader.collect(lines)}

        assert by_link["https://example.com/1"] == ()
        assert by_link["https://example.com/3"] == ("tag1", "tag2")
        assert source.calls == ["feedA", "feedB", "feedC"]

    def test_merges_and_sorts_across_feeds(self, ledger):
        source = FakeSource({
            "feedA": [make_entry(1, day=20), make_entry(2, day=10)],
            "feedB": [make_entry(3, day=15)],
        })
        reader = FeedReader(source, ledger)

        articles = reader.collect([FeedLine("feedA"), FeedLine("feedB")])

        assert [a.published_at.day for a in articles] == [10, 15, 20]

    def test_filter_applies_to_its_feed_only(self, ledger):
        source = FakeSource({"feedA": [make_entry(1)], "feedB": [make_entry(2)]})
        filters = FilterRegistry({"feedB": lambda a: setattr(a, "content", "scraped")})
        reader = FeedReader(source, ledger, filters)

        articles = reader.collect([FeedLine("feedA"), FeedLine("feedB")])

        assert [a.content for a in articles] == ["<p>body 1</p>", "scraped"]

    def test_filter_skipped_for_seen_entries(self, ledger):
        entry = make_entry(1)
        ledger.mark(entry)
        calls = []
        reader = FeedReader(FakeSource({"feedA": [entry]}), ledger, FilterRegistry({"feedA": calls.append}))

        assert reader.collect([FeedLine("feedA")]) == []
        assert calls == []

    def test_filter_failure_propagates(self, ledger):
        def broken(article):
            raise FilterError("scrape failed")

        reader = FeedReader(FakeSource({"feedA": [make_entry(1)]}), ledger, FilterRegistry({"feedA": broken}))
        with pytest.raises(FilterError):
            reader.collect([FeedLine("feedA")])

    def test_empty_feed(self, ledger):
        reader = FeedReader(FakeSource({}), ledger)
        assert reader.load_feed(FeedLine("missing")) == []
