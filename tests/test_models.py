"""Tests for the Event domain model: notes normalization, category keys, constraints."""

import pydantic
import pytest

from exocortex.domain.models import Event
from tests.conftest import at, make_event


class TestNotesNormalization:
    def test_notes_trimmed(self):
        event = make_event(at("2024-03-14", 9), notes="  walked the dog \n")
        assert event.notes == "walked the dog"

    def test_blank_notes_become_none(self):
        event = make_event(at("2024-03-14", 9), notes="   ")
        assert event.notes is None

    def test_missing_notes_is_none(self):
        event = make_event(at("2024-03-14", 9))
        assert event.notes is None


class TestCategory:
    def test_raw_category_preserved(self):
        event = make_event(at("2024-03-14", 9), category="  WORK ")
        assert event.category == "  WORK "

    def test_category_key_trimmed_and_casefolded(self):
        event = make_event(at("2024-03-14", 9), category="  WORK ")
        assert event.category_key == "work"
        assert event.category_label == "WORK"

    def test_is_category_case_insensitive(self):
        event = make_event(at("2024-03-14", 9), category=" Sleep")
        assert event.is_category("SLEEP ")
        assert not event.is_category("work")

    def test_empty_category_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            make_event(at("2024-03-14", 9), category="")


class TestConstraints:
    @pytest.mark.parametrize("field", ["happiness", "wakefulness", "health"])
    @pytest.mark.parametrize("value", [-0.01, 1.01])
    def test_mood_out_of_range_rejected(self, field, value):
        with pytest.raises(pydantic.ValidationError):
            make_event(at("2024-03-14", 9), **{field: value})

    @pytest.mark.parametrize("value", [0.0, 1.0])
    def test_mood_bounds_accepted(self, value):
        event = make_event(at("2024-03-14", 9), happiness=value)
        assert event.happiness == value

    def test_boolean_end_time_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Event(
                id="x",
                end_time=True,
                category="Work",
                happiness=0.5,
                wakefulness=0.5,
                health=0.5,
            )

    def test_frozen(self):
        event = make_event(at("2024-03-14", 9))
        with pytest.raises(pydantic.ValidationError):
            event.category = "Other"
