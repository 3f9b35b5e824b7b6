from datetime import date

import pytest

from goaltracker.core.errors import ValidationError
from goaltracker.models.weekly_recap import WeeklyRecap

W2 = date(2026, 1, 12)


def test_get_returns_none_until_created(recap_store):
    assert recap_store.get(W2) is None


def test_get_or_create_is_idempotent(recap_store, db, clock):
    first = recap_store.get_or_create(W2)
    second = recap_store.get_or_create(date(2026, 1, 16))  # Friday of the same week

    assert first.id == second.id
    assert first.week_start == W2
    assert first.created_at == first.updated_at == clock.now()
    assert db.query(WeeklyRecap).count() == 1
    assert not recap_store.has_content(first)


def test_update_writes_given_fields(recap_store, clock):
    recap = recap_store.get_or_create(W2)
    clock.advance(hours=2)

    recap_store.update(recap, wins="Shipped v1", song_of_week="Digital Love")

    reloaded = recap_store.get(W2)
    assert reloaded.wins == "Shipped v1"
    assert reloaded.song_of_week == "Digital Love"
    assert reloaded.overview is None
    assert reloaded.updated_at == clock.now()
    assert reloaded.created_at < reloaded.updated_at
    assert recap_store.has_content(reloaded)


def test_update_skips_none_and_refreshes_timestamp(recap_store, clock):
    recap = recap_store.get_or_create(W2)
    recap_store.update(recap, lessons="Rest more")
    clock.advance(minutes=5)

    recap_store.update(recap, lessons=None)

    assert recap.lessons == "Rest more"
    assert recap.updated_at == clock.now()


def test_update_rejects_unknown_field(recap_store):
    recap = recap_store.get_or_create(W2)
    with pytest.raises(ValidationError):
        recap_store.update(recap, mood="great")


def test_update_publishes_events(recap_store, published):
    recap = recap_store.get_or_create(W2)
    recap_store.update(recap, overview="Busy")
    assert published == ["recap.created", "recap.updated"]


def test_export_text(recap_store):
    recap = recap_store.get_or_create(W2)
    recap_store.update(recap, overview="Good week", wins="Shipped", next_week_focus="Rest")

    text = recap_store.export_text(recap)

    assert text == (
        "Weekly Recap - Jan 12 - 18, 2026\n"
        + "=" * 40
        + "\n\n"
        "OVERVIEW\nGood week\n\n"
        "WINS\nShipped\n\n"
        "NEXT WEEK FOCUS\nRest\n\n"
    )


def test_export_of_empty_recap_is_header_only(recap_store):
    recap = recap_store.get_or_create(date(2025, 12, 31))
    assert recap_store.export_text(recap) == (
        "Weekly Recap - Dec 29, 2025 - Jan 4, 2026\n" + "=" * 40 + "\n\n"
    )


def test_recaps_are_per_week(recap_store):
    this_week = recap_store.get_or_create(W2)
    last_week = recap_store.get_or_create(date(2026, 1, 5))
    recap_store.update(last_week, overview="Slow start")

    assert this_week.id != last_week.id
    assert recap_store.get(W2).overview is None
