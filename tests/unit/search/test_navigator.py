import pytest

from notelens.search.navigator import MatchNavigator
from notelens.search.query import compile_query
from notelens.search.types import MatchLocator


@pytest.mark.unit
class TestMatchNavigator:
    """Cyclic navigation between matches."""

    def test_next_wraps(self):
        nav = MatchNavigator(total=3)
        assert [nav.next(), nav.next(), nav.next()] == [1, 2, 0]

    def test_prev_wraps_from_start(self):
        nav = MatchNavigator(total=3)
        assert nav.prev() == 2
        assert nav.prev() == 1

    def test_no_matches_is_noop(self):
        nav = MatchNavigator()
        assert nav.next() == 0
        assert nav.prev() == 0
        assert nav.current_locator is None
        assert nav.position_label == "0"

    def test_single_match_stays_put(self):
        nav = MatchNavigator(total=1)
        assert nav.next() == 0
        assert nav.prev() == 0

    def test_reset_returns_to_first_match(self):
        nav = MatchNavigator(total=5)
        nav.next()
        nav.next()
        nav.reset(2)
        assert nav.current_index == 0
        assert nav.total == 2

    def test_update_recounts(self):
        nav = MatchNavigator(total=10)
        nav.prev()
        total = nav.update("one two one", compile_query("one"))
        assert total == 2
        assert nav.current_index == 0

    def test_locators(self):
        nav = MatchNavigator(total=2)
        assert nav.locator_for(1) == MatchLocator(1)
        assert nav.locator_for(1).element_id == "match-1"
        assert nav.locator_for(2) is None
        assert nav.locator_for(-1) is None
        nav.next()
        assert nav.current_locator == MatchLocator(1)

    def test_position_label(self):
        nav = MatchNavigator(total=4)
        nav.prev()
        assert nav.position_label == "4/4"

    def test_negative_total_clamped(self):
        assert MatchNavigator(total=-3).total == 0
