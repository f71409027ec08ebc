from __future__ import annotations

from datetime import datetime, timedelta, timezone

from core.models import MentionRecord
from core.policy import MentionPolicy, whole_days_between

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_query_on_absent_record_reports_never() -> None:
    report = MentionPolicy().evaluate_query(MentionRecord(), T0)
    assert report.days is None
    assert report.last_mention is None


def test_query_truncates_days() -> None:
    policy = MentionPolicy()
    record = MentionRecord(last_mention=T0)

    assert policy.evaluate_query(record, T0 + timedelta(days=3, hours=23, minutes=59)).days == 3
    assert policy.evaluate_query(record, T0 + timedelta(hours=23, minutes=59)).days == 0
    report = policy.evaluate_query(record, T0 + timedelta(days=1))
    assert report.days == 1
    assert report.last_mention == T0


def test_trigger_exactly_at_cooldown_boundary_is_reported() -> None:
    policy = MentionPolicy(timedelta(hours=2))
    record = MentionRecord(last_mention=T0)

    outcome = policy.evaluate_trigger(record, "apple", T0 + timedelta(hours=2))
    assert not outcome.suppressed
    assert outcome.matched_span == "apple"


def test_trigger_one_second_inside_cooldown_is_suppressed() -> None:
    policy = MentionPolicy(timedelta(hours=2))
    record = MentionRecord(last_mention=T0)

    outcome = policy.evaluate_trigger(record, "apple", T0 + timedelta(hours=2) - timedelta(seconds=1))
    assert outcome.suppressed


def test_trigger_without_record_is_never_suppressed() -> None:
    outcome = MentionPolicy().evaluate_trigger(MentionRecord(), "Apple", T0)
    assert not outcome.suppressed
    assert outcome.matched_span == "Apple"


def test_reset_from_never() -> None:
    new_record, summary = MentionPolicy().confirm_reset(MentionRecord(), T0)
    assert new_record.last_mention == T0
    assert summary.new_mention == T0
    assert summary.previous_mention is None
    assert summary.days_was is None


def test_reset_ignores_cooldown_and_reports_days_was() -> None:
    policy = MentionPolicy(timedelta(hours=2))
    earlier = MentionRecord(last_mention=T0)

    _, summary = policy.confirm_reset(earlier, T0 + timedelta(minutes=5))
    assert summary.days_was == 0
    assert summary.previous_mention == T0

    later = T0 + timedelta(days=10, hours=5)
    new_record, summary = policy.confirm_reset(earlier, later)
    assert summary.days_was == 10
    assert new_record.last_mention == later


def test_reset_then_query_reports_zero_days() -> None:
    policy = MentionPolicy()
    new_record, _ = policy.confirm_reset(MentionRecord(last_mention=T0), T0 + timedelta(days=4))
    assert policy.evaluate_query(new_record, T0 + timedelta(days=4)).days == 0


def test_reset_does_not_mutate_input_record() -> None:
    record = MentionRecord(last_mention=T0)
    MentionPolicy().confirm_reset(record, T0 + timedelta(days=1))
    assert record.last_mention == T0


def test_whole_days_truncate_toward_zero() -> None:
    assert whole_days_between(T0, T0 + timedelta(hours=47)) == 1
    # Clock skew never yields a rounded-away negative count.
    assert whole_days_between(T0, T0 - timedelta(hours=47)) == -1
