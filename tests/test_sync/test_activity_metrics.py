"""Tests for single-activity sync: load computation, storage, propagation."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from load_engine.exceptions import ActivitySourceError, LoadEngineError
from load_engine.models.activity import ActivityStreams
from load_engine.models.athlete import AthleteProfile
from load_engine.models.enums import LoadModel
from load_engine.sync import LoadSyncService

ATHLETE = "athlete-1"
NOW = datetime(2026, 3, 10, 6, 0)


@pytest.fixture
def service(store, source) -> LoadSyncService:
    return LoadSyncService(store, source, today=lambda: date(2026, 3, 10), clock=lambda: NOW)


class TestSyncActivityMetrics:
    def test_stores_load_and_propagates(
        self, service, store, source, lthr_athlete, make_activity, steady_streams
    ) -> None:
        store.save_athlete_profile(lthr_athlete)
        source.add(make_activity(), steady_streams)

        load = service.sync_activity_metrics(ATHLETE, "a1")

        assert store.get_activity_load("a1") == load
        assert load.formula_version == "edwards@1.0.0"
        assert len(store.list_daily_profiles(ATHLETE)) == 10
        assert store.daily[(ATHLETE, date(2026, 3, 1))].daily_trimp == pytest.approx(60.0)

    def test_skip_chain_sync(self, service, store, source, make_activity, steady_streams) -> None:
        source.add(make_activity(), steady_streams)
        service.sync_activity_metrics(ATHLETE, "a1", skip_chain_sync=True)
        assert store.get_activity_load("a1") is not None
        assert store.list_daily_profiles(ATHLETE) == []

    def test_requested_model(self, service, source, make_activity, steady_streams) -> None:
        source.add(make_activity(), steady_streams)
        load = service.sync_activity_metrics(ATHLETE, "a1", model=LoadModel.FORMA)
        assert load.formula_version == "forma@1.0.0"

    def test_missing_hr_still_loads(self, service, store, source, make_activity) -> None:
        source.add(make_activity(average_heartrate=None), ActivityStreams())
        load = service.sync_activity_metrics(ATHLETE, "a1", model=LoadModel.FORMA)
        assert load.formula_version == "estimated@1.0.0"
        assert load.trimp_score > 0
        assert store.daily[(ATHLETE, date(2026, 3, 1))].daily_trimp == load.trimp_score

    def test_resync_is_idempotent(self, service, store, source, make_activity, steady_streams) -> None:
        source.add(make_activity(), steady_streams)
        service.sync_activity_metrics(ATHLETE, "a1")
        service.sync_activity_metrics(ATHLETE, "a1")
        assert len(store.activity_loads) == 1
        assert store.daily[(ATHLETE, date(2026, 3, 1))].daily_trimp == pytest.approx(60.0)

    def test_prefetched_summary(self, service, source, make_activity, steady_streams) -> None:
        activity = make_activity()
        source.add(activity, steady_streams)
        del source.activities["a1"]
        load = service.sync_activity_metrics(ATHLETE, "a1", activity=activity)
        assert load.activity_id == "a1"

    def test_source_error_propagates(self, service, source, make_activity) -> None:
        source.add(make_activity())
        source.failing.add("a1")
        with pytest.raises(ActivitySourceError):
            service.sync_activity_metrics(ATHLETE, "a1")

    def test_no_source_configured(self, store) -> None:
        with pytest.raises(LoadEngineError):
            LoadSyncService(store).sync_activity_metrics(ATHLETE, "a1")


class TestLTHRSuggestion:
    def test_hard_effort_suggests_lthr(
        self, service, store, source, lthr_athlete, make_activity, steady_streams
    ) -> None:
        store.save_athlete_profile(lthr_athlete)
        source.add(make_activity(average_heartrate=180, moving_time=4000), steady_streams)
        service.sync_activity_metrics(ATHLETE, "a1")
        profile = store.get_athlete_profile(ATHLETE)
        assert profile.suggested_lthr == 180
        assert profile.lthr == 170

    def test_easy_effort_leaves_profile(
        self, service, store, source, lthr_athlete, make_activity, steady_streams
    ) -> None:
        store.save_athlete_profile(lthr_athlete)
        source.add(make_activity(average_heartrate=140), steady_streams)
        service.sync_activity_metrics(ATHLETE, "a1")
        assert store.get_athlete_profile(ATHLETE) == lthr_athlete

    def test_profile_created_for_new_athlete(
        self, service, store, source, make_activity, steady_streams
    ) -> None:
        source.add(make_activity(average_heartrate=160, moving_time=4000), steady_streams)
        service.sync_activity_metrics(ATHLETE, "a1")
        assert store.get_athlete_profile(ATHLETE) == AthleteProfile(
            athlete_id=ATHLETE, suggested_lthr=160
        )
