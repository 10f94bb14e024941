"""Tests for the onboarding form state machine."""

import pytest

from saathi.conversation.slot_manager import (
    ONBOARDING_SLOTS,
    get_confirmation_summary,
    get_slot_definition,
    normalize_slot,
)
from saathi.conversation.state_machine import (
    FORM_TRANSITIONS,
    FormCompletedError,
    InvalidTransitionError,
    advance_form,
    new_form,
)
from saathi.schemas.session_schema import FormStage


@pytest.fixture
def form():
    return new_form("onboard_doc")


class TestInitialState:
    def test_starts_at_name(self, form):
        assert form.current_field == FormStage.NAME
        assert form.values == {}
        assert form.completed is False


class TestTransitions:
    def test_name_to_vehicle_registration(self, form):
        nxt, effect = advance_form(form, "Ramesh Kumar")
        assert nxt.current_field == FormStage.VEHICLE_REGISTRATION
        assert nxt.values == {"name": "Ramesh Kumar"}
        assert effect.field == FormStage.NAME
        assert effect.completed is False

    def test_vehicle_registration_to_phone(self, form):
        form, _ = advance_form(form, "Ramesh Kumar")
        nxt, effect = advance_form(form, "MH12AB1234")
        assert nxt.current_field == FormStage.PHONE
        assert nxt.values["vehicle_registration"] == "MH12AB1234"
        assert effect.next_stage == FormStage.PHONE

    def test_phone_completes_form_with_digits(self, form):
        form, _ = advance_form(form, "Ramesh Kumar")
        form, _ = advance_form(form, "MH12AB1234")
        nxt, effect = advance_form(form, "call me at 98765 43210")
        assert nxt.completed is True
        assert nxt.current_field == FormStage.COMPLETED
        assert nxt.values == {
            "name": "Ramesh Kumar",
            "vehicle_registration": "MH12AB1234",
            "phone": "9876543210",
        }
        assert effect.completed is True

    def test_phone_without_digits_keeps_raw_text(self, form):
        form, _ = advance_form(form, "Ramesh Kumar")
        form, _ = advance_form(form, "MH12AB1234")
        nxt, _ = advance_form(form, "nau aath saat")
        assert nxt.values["phone"] == "nau aath saat"

    def test_values_are_stored_as_entered(self, form):
        nxt, _ = advance_form(form, "  ramesh  ")
        assert nxt.values["name"] == "  ramesh  "

    def test_input_form_is_not_mutated(self, form):
        advance_form(form, "Ramesh Kumar")
        assert form.current_field == FormStage.NAME
        assert form.values == {}

    def test_transitions_only_move_forward(self):
        order = [FormStage.NAME, FormStage.VEHICLE_REGISTRATION, FormStage.PHONE, FormStage.COMPLETED]
        for t in FORM_TRANSITIONS:
            assert order.index(t.to_stage) == order.index(t.from_stage) + 1


class TestCompletedForm:
    def test_completed_form_rejects_writes(self, form):
        for answer in ("Ramesh Kumar", "MH12AB1234", "9876543210"):
            form, _ = advance_form(form, answer)
        with pytest.raises(FormCompletedError):
            advance_form(form, "1111111111")
        assert form.values["phone"] == "9876543210"

    def test_completed_error_is_invalid_transition(self):
        assert issubclass(FormCompletedError, InvalidTransitionError)


class TestSlotDefinitions:
    def test_slots_follow_form_order(self):
        assert [d.stage for d in ONBOARDING_SLOTS] == [
            FormStage.NAME, FormStage.VEHICLE_REGISTRATION, FormStage.PHONE,
        ]

    def test_completed_has_no_slot(self):
        assert get_slot_definition(FormStage.COMPLETED) is None

    def test_normalize_terminal_stage_raises(self):
        with pytest.raises(ValueError):
            normalize_slot(FormStage.COMPLETED, "x")

    def test_confirmation_summary(self):
        summary = get_confirmation_summary(
            {"phone": "99", "name": "Asha", "vehicle_registration": "KA01X1"}
        )
        assert summary == "Naam: Asha, Vehicle: KA01X1, Phone: 99"
