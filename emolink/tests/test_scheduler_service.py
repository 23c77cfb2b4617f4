"""
Tests for StreakRefreshScheduler.

Tests cover:
1. Job registration happens once per instance
2. Reset allows registering again
3. The refresh job updates cached streaks
"""
from datetime import datetime, timedelta

from emolink.services.scheduler_service import (
    StreakRefreshScheduler, run_streak_refresh, STREAK_REFRESH_JOB_ID
)
from emolink.repositories.profile_repository import ProfileRepository
from emolink.tests.conftest import add_entry, add_profile


class TestSchedulerState:
    """Tests for job registration state"""

    def test_jobs_registered_once(self, session_factory):
        scheduler = StreakRefreshScheduler(refresh_time="00:05", session_factory=session_factory)

        scheduler.schedule_jobs()
        scheduler.schedule_jobs()

        assert scheduler.jobs_scheduled is True
        assert [job.id for job in scheduler.scheduler.get_jobs()] == [STREAK_REFRESH_JOB_ID]

    def test_separate_instances_do_not_share_state(self, session_factory):
        first = StreakRefreshScheduler(session_factory=session_factory)
        second = StreakRefreshScheduler(session_factory=session_factory)

        first.schedule_jobs()

        assert first.jobs_scheduled is True
        assert second.jobs_scheduled is False

    def test_reset_clears_state(self, session_factory):
        scheduler = StreakRefreshScheduler(session_factory=session_factory)
        scheduler.schedule_jobs()

        scheduler.reset()

        assert scheduler.jobs_scheduled is False
        assert scheduler.scheduler.get_jobs() == []

    def test_invalid_time_falls_back(self, session_factory):
        scheduler = StreakRefreshScheduler(refresh_time="late", session_factory=session_factory)

        scheduler.schedule_jobs()

        assert scheduler.jobs_scheduled is True


class TestRefreshJob:
    """Tests for run_streak_refresh job"""

    def test_refreshes_profiles(self, db_session, session_factory):
        add_profile(db_session, "user-1", current_streak=9)
        add_entry(db_session, "user-1", datetime.now())
        add_profile(db_session, "user-2", current_streak=4)

        refreshed = run_streak_refresh(session_factory)

        db_session.expire_all()
        assert refreshed == 2
        assert ProfileRepository.get_by_user_id(db_session, "user-1").current_streak == 1
        assert ProfileRepository.get_by_user_id(db_session, "user-2").current_streak == 0
