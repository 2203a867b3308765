# tests/test_concurrency.py

"""Tests for overlapping loads and their completion order.

Fetch completion order is controlled with GatedFetcher, so each test
decides which of two in-flight requests finishes first.
"""

import asyncio

import pytest
from factories import (
    GatedFetcher,
    hands_payload,
    leaderboard_payload,
    paged,
    stats_payload,
)

from holdemstats.exceptions import NotFoundError, TransportError
from holdemstats.schemas import StatisticsViewModel
from holdemstats.store import StatisticsEffects, StatisticsStore

# =============================================================================
# Helper Functions
# =============================================================================


def make_effects(store: StatisticsStore) -> tuple[StatisticsEffects, GatedFetcher]:
    fetcher = GatedFetcher()
    return StatisticsEffects(store, fetcher), fetcher


# =============================================================================
# Last completed write wins
# =============================================================================


@pytest.mark.asyncio
async def test_last_completed_player_stats_load_wins(store: StatisticsStore):
    """Test that an older load finishing last overwrites a newer one.

    There is no request cancellation: "A" is issued first but completes
    after "B", so the store ends up showing "A".
    """
    # 1. ARRANGE: Both responses are held back.
    effects, fetcher = make_effects(store)
    fetcher.route("/statistics/player/A", stats_payload("A"))
    fetcher.route("/statistics/player/B", stats_payload("B"))
    release_a = fetcher.hold("/statistics/player/A")
    release_b = fetcher.hold("/statistics/player/B")

    # 2. ACT: Issue A then B, then let B finish before A.
    task_a = effects.load_player_stats("A")
    task_b = effects.load_player_stats("B")
    release_b.set()
    await task_b
    assert store.state.player_stats is not None
    assert store.state.player_stats.player_id == "B"

    release_a.set()
    await task_a

    # 3. ASSERT: Last completed wins.
    assert store.state.player_stats.player_id == "A"
    assert store.state.is_loading is False


@pytest.mark.asyncio
async def test_first_issued_completing_first_is_overwritten(store: StatisticsStore):
    effects, fetcher = make_effects(store)
    fetcher.route("/statistics/player/A", stats_payload("A"))
    fetcher.route("/statistics/player/B", stats_payload("B"))

    effects.load_player_stats("A")
    effects.load_player_stats("B")
    await effects.wait_idle()

    assert store.state.player_stats is not None
    assert store.state.player_stats.player_id == "B"


@pytest.mark.asyncio
async def test_later_failure_overwrites_earlier_error(store: StatisticsStore):
    """Test that the single error slot holds the most recent failure."""
    effects, fetcher = make_effects(store)
    fetcher.route("/statistics/all", NotFoundError())
    fetcher.route("/statistics/leaderboard", TransportError("connection refused"))
    release_leaderboard = fetcher.hold("/statistics/leaderboard")

    leaderboard = effects.load_leaderboard()
    await effects.load_all_players_stats()
    assert store.state.error == "Statistics not found"

    release_leaderboard.set()
    await leaderboard

    assert store.state.error == "Error: connection refused"
    assert store.state.is_loading is False


@pytest.mark.asyncio
async def test_loading_flag_is_shared_between_loads(store: StatisticsStore):
    """Test that the coarse flag drops when any load completes."""
    effects, fetcher = make_effects(store)
    fetcher.route("/statistics/all", [])
    fetcher.route("/statistics/leaderboard", leaderboard_payload("p1"))
    release_leaderboard = fetcher.hold("/statistics/leaderboard")

    leaderboard = effects.load_leaderboard()
    await effects.load_all_players_stats()

    # The leaderboard is still in flight but the shared flag is already down
    assert effects.in_flight == 1
    assert store.state.is_loading is False

    release_leaderboard.set()
    await leaderboard
    assert len(store.state.leaderboard) == 1


# =============================================================================
# Load-more serialization
# =============================================================================


@pytest.mark.asyncio
async def test_repeated_load_more_fetches_next_page_once(store: StatisticsStore):
    """Test that a second load-more while one is in flight joins the first."""
    # 1. ARRANGE: Page 0 of a three-page history is loaded.
    effects, fetcher = make_effects(store)
    fetcher.route("/hand-history/player/p1", paged(hands_payload("h", 5)))
    store.set_page_size(2)
    await effects.load_hand_history("p1")
    release = fetcher.hold("/hand-history/player/p1")

    # 2. ACT: Two load-more intents before page 1 has landed.
    first = effects.load_more_history("p1")
    second = effects.load_more_history("p1")
    release.set()
    await effects.wait_idle()

    # 3. ASSERT: One request, no duplicated hands.
    assert first is not None
    assert second is first
    page_one = ("/hand-history/player/p1", {"page": 1, "size": 2})
    assert fetcher.calls.count(page_one) == 1
    assert [h.id for h in store.state.hand_history] == ["h-1", "h-2", "h-3", "h-4"]
    assert store.state.current_page == 1


@pytest.mark.asyncio
async def test_load_more_after_previous_page_landed_reads_new_cursor(
    store: StatisticsStore,
):
    effects, fetcher = make_effects(store)
    fetcher.route("/hand-history/player/p1", paged(hands_payload("h", 5)))
    store.set_page_size(2)
    await effects.load_hand_history("p1")

    first = effects.load_more_history("p1")
    assert first is not None
    await first
    second = effects.load_more_history("p1")

    assert second is not None
    assert second is not first
    await second
    assert fetcher.calls[-1] == ("/hand-history/player/p1", {"page": 2, "size": 2})
    assert len(store.state.hand_history) == 5


@pytest.mark.asyncio
async def test_load_more_of_replaced_history_is_dropped(store: StatisticsStore):
    """Test that a page fetched for a list replaced meanwhile is not appended."""
    # 1. ARRANGE: p1's page 1 is held back.
    effects, fetcher = make_effects(store)
    fetcher.route("/hand-history/player/p1", paged(hands_payload("h", 5)))
    fetcher.route("/hand-history/player/p2", paged(hands_payload("x", 2)))
    store.set_page_size(2)
    await effects.load_hand_history("p1")
    release_p1 = fetcher.hold("/hand-history/player/p1")

    # 2. ACT: Load more, then replace the list before page 1 lands.
    more = effects.load_more_history("p1")
    assert more is not None
    await effects.load_hand_history("p2")
    release_p1.set()
    await more

    # 3. ASSERT: Only the fresh list is shown.
    assert [h.id for h in store.state.hand_history] == ["x-1", "x-2"]
    assert (store.state.current_page, store.state.total_pages) == (0, 1)
    assert store.state.is_loading is False
    assert store.state.error is None


# =============================================================================
# Composite dashboard initialisation
# =============================================================================


@pytest.mark.asyncio
async def test_initialize_dashboard_starts_three_independent_loads(
    store: StatisticsStore,
):
    # 1. ARRANGE
    effects, fetcher = make_effects(store)
    fetcher.route("/statistics/player/p1", stats_payload("p1"))
    fetcher.route("/statistics/leaderboard", leaderboard_payload("p2", "p1"))
    fetcher.route("/hand-history/player/p1", paged(hands_payload("h", 3)))

    # 2. ACT
    load = effects.initialize_dashboard("p1")
    assert store.state.is_loading is True
    await load.wait()

    # 3. ASSERT
    assert sorted(path for path, _ in fetcher.calls) == [
        "/hand-history/player/p1",
        "/statistics/leaderboard",
        "/statistics/player/p1",
    ]
    assert ("/statistics/leaderboard", {"limit": 10}) in fetcher.calls
    assert ("/hand-history/player/p1", {"page": 0, "size": 20}) in fetcher.calls
    vm = store.view_model
    assert vm.player_rank == 2
    assert len(vm.hand_history) == 3
    assert vm.is_loading is False
    assert vm.error is None


@pytest.mark.asyncio
async def test_initialize_dashboard_does_not_aggregate_status(
    store: StatisticsStore,
):
    """Test that the visible status is whatever finished last.

    The player stats load fails first; the leaderboard then succeeds and,
    being a data write, clears the error. This is the documented behaviour
    of the composite load, not an aggregated "dashboard ready" signal.
    """
    effects, fetcher = make_effects(store)
    fetcher.route("/statistics/player/p1", NotFoundError())
    fetcher.route("/statistics/leaderboard", leaderboard_payload("p1"))
    fetcher.route("/hand-history/player/p1", paged([]))
    release_leaderboard = fetcher.hold("/statistics/leaderboard")
    release_history = fetcher.hold("/hand-history/player/p1")

    load = effects.initialize_dashboard("p1")
    await load.player_stats
    assert store.state.error == "Statistics not found"
    assert store.state.is_loading is False

    release_history.set()
    release_leaderboard.set()
    await load.wait()

    assert store.state.error is None
    assert store.state.player_stats is None
    assert len(store.state.leaderboard) == 1


# =============================================================================
# View-model stream under concurrent completion
# =============================================================================


@pytest.mark.asyncio
async def test_view_model_is_recomputed_once_per_completion(store: StatisticsStore):
    """Test that the writes of one completion reach subscribers as one snapshot."""
    effects, fetcher = make_effects(store)
    fetcher.route("/hand-history/player/p1", paged(hands_payload("h", 3)))
    release = fetcher.hold("/hand-history/player/p1")
    received: list[StatisticsViewModel] = []
    store.subscribe(received.append)

    task = effects.load_hand_history("p1")
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    release.set()
    await task
    await asyncio.sleep(0)

    # Initial, loading on, then one for history + pagination + loading off
    assert len(received) == 3
    assert received[1].is_loading is True
    final = received[2]
    assert len(final.hand_history) == 3
    assert (final.current_page, final.total_pages) == (0, 1)
    assert final.is_loading is False


# =============================================================================
# Teardown
# =============================================================================


@pytest.mark.asyncio
async def test_completion_after_discard_is_ignored(store: StatisticsStore):
    """Test that an in-flight fetch finishing after teardown writes nothing."""
    effects, fetcher = make_effects(store)
    fetcher.route("/statistics/player/p1", stats_payload("p1"))
    release = fetcher.hold("/statistics/player/p1")

    task = effects.load_player_stats("p1")
    store.discard()
    release.set()
    await task

    assert store.state.player_stats is None
    assert store.state.is_loading is False


@pytest.mark.asyncio
async def test_wait_idle_with_nothing_in_flight(store: StatisticsStore):
    effects, _ = make_effects(store)

    await effects.wait_idle()

    assert effects.in_flight == 0
