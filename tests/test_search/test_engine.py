"""
Tests for the incremental matching engine.
"""

import pytest

from papr.search.engine import MatchEngine
from papr.search.models import MatcherConfig


def _text(item):
    return item


@pytest.fixture
def small_batches() -> MatcherConfig:
    """One item per tick, scored on the calling thread."""
    return MatcherConfig(tick_batch_size=1, worker_threads=1)


class TestMatchEngine:
    """Tests for MatchEngine."""

    def test_push_returns_indices(self):
        """Test that pushed items are numbered in order."""
        with MatchEngine() as engine:
            assert engine.push("intro", _text) == 0
            assert engine.injector().push("conclusion", _text) == 1
            assert engine.item_count == 2

    def test_empty_engine_is_idle(self):
        """Test that ticking an empty engine reports nothing to do."""
        with MatchEngine() as engine:
            status = engine.tick()

            assert status.running is False
            assert status.changed is False
            assert engine.run() is True

    def test_run_converges(self):
        """Test that run scores every item and keeps the matches."""
        with MatchEngine() as engine:
            for text in ["intro", "we use a transformer architecture", "conclusion"]:
                engine.push(text, _text)
            engine.reparse("transformer")

            assert engine.run() is True

            snapshot = engine.snapshot()
            assert snapshot.matched_item_count == 1
            item = snapshot.matched_items()[0]
            assert item.index == 1
            assert item.data == "we use a transformer architecture"

    def test_snapshot_ordered_by_score_then_index(self):
        """Test that better scores come first and ties keep push order."""
        with MatchEngine() as engine:
            for text in ["resnet", "net", "resnet", "n e t"]:
                engine.push(text, _text)
            engine.reparse("net")
            engine.run()

            items = engine.snapshot().matched_items()
            scores = [item.score for item in items]

            assert scores == sorted(scores, reverse=True)
            assert items[0].data == "net"
            assert [i.index for i in items if i.data == "resnet"] == [0, 2]

    def test_empty_pattern_matches_all(self):
        """Test that a blank pattern matches every item with score 0."""
        with MatchEngine() as engine:
            for text in ["a", "b", "c"]:
                engine.push(text, _text)
            engine.reparse("")
            engine.run()

            items = engine.snapshot().matched_items()

            assert [(i.index, i.score) for i in items] == [(0, 0), (1, 0), (2, 0)]

    def test_tick_budget(self, small_batches: MatcherConfig):
        """Test that an exhausted budget reports partial progress."""
        with MatchEngine(small_batches) as engine:
            for text in ["alpha", "beta", "gamma", "delta", "zeta"]:
                engine.push(text, _text)
            engine.reparse("a")

            assert engine.run(max_ticks=2) is False
            assert engine.pending_count == 3
            assert engine.snapshot().matched_item_count == 2

            assert engine.run() is True
            assert engine.snapshot().matched_item_count == 5

    def test_tick_reports_progress(self, small_batches: MatcherConfig):
        """Test the status returned by each tick."""
        with MatchEngine(small_batches) as engine:
            engine.push("alpha", _text)
            engine.push("beta", _text)
            engine.reparse("alp")

            first = engine.tick()
            second = engine.tick()

            assert (first.changed, first.running) == (True, True)
            assert (second.changed, second.running) == (False, False)

    def test_reparse_rescores(self):
        """Test that a new pattern discards previous matches."""
        with MatchEngine() as engine:
            engine.push("graph neural network", _text)
            engine.push("state space model", _text)

            engine.reparse("graph")
            engine.run()
            assert [i.index for i in engine.snapshot().matched_items()] == [0]

            engine.reparse("space")
            assert engine.snapshot().matched_item_count == 0
            engine.run()
            assert [i.index for i in engine.snapshot().matched_items()] == [1]

    def test_thread_pool_matches_sequential(self):
        """Test that scoring on several threads gives the same result."""
        texts = [f"paper {n} about {'transformers' if n % 3 == 0 else 'graphs'}" for n in range(50)]

        results = []
        for config in (MatcherConfig(worker_threads=1), MatcherConfig(tick_batch_size=4, worker_threads=4)):
            with MatchEngine(config) as engine:
                for text in texts:
                    engine.push(text, _text)
                engine.reparse("transformer")
                engine.run()
                results.append([(i.index, i.score) for i in engine.snapshot().matched_items()])

        assert results[0] == results[1]
        assert len(results[0]) == 17

    def test_close_releases_pool(self):
        """Test that leaving the context shuts the pool down."""
        engine = MatchEngine(MatcherConfig(tick_batch_size=1, worker_threads=2))
        with engine:
            for text in ["a", "b", "c"]:
                engine.push(text, _text)
            engine.run()
            assert engine._executor is not None

        assert engine._executor is None

    def test_snapshot_range(self):
        """Test slicing the matched items."""
        with MatchEngine() as engine:
            for text in ["a1", "a2", "a3"]:
                engine.push(text, _text)
            engine.reparse("a")
            engine.run()

            snapshot = engine.snapshot()

            assert [i.data for i in snapshot.matched_items(1, 3)] == ["a2", "a3"]
            assert snapshot.item_count == 3
