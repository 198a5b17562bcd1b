from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from plancards.app.entitlements import (
    PlanToken,
    classify_plan,
    normalize_plan_label,
    parse_timestamp,
)


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Premium Plan", "premium"),
        ("  PREMIUM PLAN  ", "premium"),
        ("Scheduled Cancel", "scheduled cancel"),
        ("pending plan", "pending"),
        ("premium plan plan", "premium"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_plan_label(label, expected):
    assert normalize_plan_label(label) == expected


@pytest.mark.parametrize(
    "label",
    ["Premium Plan", "a pl planan", "Scheduled Cancel Plan", "  pending  plan ", "Team"],
)
def test_normalization_is_idempotent(label):
    once = normalize_plan_label(label)

    assert normalize_plan_label(once) == once


def test_classify_plan_recognizes_known_tokens():
    assert classify_plan("premium") == PlanToken.PREMIUM
    assert classify_plan("pending") == PlanToken.PENDING
    assert classify_plan("scheduled cancel") == PlanToken.SCHEDULED_CANCEL
    assert classify_plan("enterprise") == PlanToken.UNRECOGNIZED
    assert classify_plan("") == PlanToken.UNRECOGNIZED


def test_parse_timestamp_accepts_iso_strings():
    parsed = parse_timestamp("2025-06-03T08:30:00Z")

    assert parsed == datetime(2025, 6, 3, 8, 30, tzinfo=timezone.utc)


def test_parse_timestamp_converts_offsets_to_utc():
    parsed = parse_timestamp("2025-06-03T10:30:00+02:00")

    assert parsed == datetime(2025, 6, 3, 8, 30, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_timestamp_handles_dates_and_naive_datetimes():
    assert parse_timestamp(date(2025, 6, 3)) == datetime(2025, 6, 3, tzinfo=timezone.utc)
    assert parse_timestamp(datetime(2025, 6, 3, 9)) == datetime(2025, 6, 3, 9, tzinfo=timezone.utc)


def test_parse_timestamp_reads_numbers_as_epoch_milliseconds():
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert parse_timestamp(1_800_000_000) == datetime(1970, 1, 21, 20, tzinfo=timezone.utc)
    assert parse_timestamp(1_748_779_200_000) == datetime(2025, 6, 1, 12, tzinfo=timezone.utc)


def test_parse_timestamp_rejects_out_of_range_numbers():
    assert parse_timestamp(10**20) is None


@pytest.mark.parametrize(
    "value",
    [None, "", "   ", "tomorrow", "2025-02-30T00:00:00", False, float("inf"), object()],
)
def test_parse_timestamp_returns_none_for_unusable_values(value):
    assert parse_timestamp(value) is None
