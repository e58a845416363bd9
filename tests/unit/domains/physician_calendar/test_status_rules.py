# ============================================================================
# Tests for appointment status rules
# ============================================================================
"""Unit tests for AppointmentStatus, auto-completion eligibility, expiry overlay and echo merging."""

from datetime import datetime

import pytest

from agenda.domains.physician_calendar.domain.services.status_rules import (
    apply_view_corrections,
    is_eligible_for_auto_completion,
    is_expired_open_slot,
    merge_server_echo,
)
from agenda.domains.physician_calendar.domain.value_objects import AppointmentStatus

S = AppointmentStatus.SCHEDULED
C = AppointmentStatus.COMPLETED
X = AppointmentStatus.CANCELLED


class TestAppointmentStatus:
    """Tests for the status enum."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("scheduled", S),
            ("Completed", C),
            (" CANCELLED ", X),
            ("expired", S),
            ("pending", S),
            (None, S),
        ],
    )
    def test_from_backend(self, raw, expected) -> None:
        """Should normalize known values and default everything else to scheduled."""
        assert AppointmentStatus.from_backend(raw) == expected

    def test_transitions(self) -> None:
        """Should only allow scheduled to move forward."""
        assert S.can_transition_to(C) is True
        assert S.can_transition_to(AppointmentStatus.EXPIRED) is True
        assert S.can_transition_to(X) is False
        assert C.can_transition_to(S) is False
        assert X.can_transition_to(C) is False

    def test_final_states(self) -> None:
        """Should treat completed and cancelled as final."""
        assert C.is_final() is True
        assert X.is_final() is True
        assert S.is_final() is False
        assert AppointmentStatus.EXPIRED.is_final() is False


class TestAutoCompletionEligibility:
    """Tests for is_eligible_for_auto_completion."""

    def test_boundary(self, make_appointment) -> None:
        """Should become eligible exactly at end + grace."""
        visit = make_appointment("13:30")
        assert is_eligible_for_auto_completion(visit, datetime(2099, 3, 10, 14, 5)) is True
        assert is_eligible_for_auto_completion(visit, datetime(2099, 3, 10, 14, 4, 59)) is False

    def test_custom_grace_period(self, make_appointment) -> None:
        """Should honour a configured grace period."""
        visit = make_appointment("13:30")
        assert is_eligible_for_auto_completion(visit, datetime(2099, 3, 10, 14, 0), grace_period_minutes=0) is True

    def test_ledger_duration_moves_boundary(self, make_appointment) -> None:
        """Should use the recorded duration to locate the end."""
        visit = make_appointment("13:30")
        durations = {"2099-03-10T13:30:00": 60}
        assert is_eligible_for_auto_completion(visit, datetime(2099, 3, 10, 14, 5), durations=durations) is False
        assert is_eligible_for_auto_completion(visit, datetime(2099, 3, 10, 14, 35), durations=durations) is True

    @pytest.mark.parametrize("status", [C, X, AppointmentStatus.EXPIRED])
    def test_non_scheduled_never_eligible(self, make_appointment, status) -> None:
        """Should skip anything that is not scheduled."""
        visit = make_appointment("08:00", status=status)
        assert is_eligible_for_auto_completion(visit, datetime(2099, 3, 11, 0, 0)) is False

    def test_open_slot_never_eligible(self, make_appointment) -> None:
        """Should skip open slots."""
        slot = make_appointment("08:00", patient_id="0")
        assert is_eligible_for_auto_completion(slot, datetime(2099, 3, 11, 0, 0)) is False

    def test_unparseable_never_eligible(self, make_appointment) -> None:
        """Should skip records without a readable timestamp."""
        broken = make_appointment("2099-03-10Tbad")
        assert is_eligible_for_auto_completion(broken, datetime(2099, 3, 11, 0, 0)) is False


class TestExpiryOverlay:
    """Tests for the view-only expired status."""

    def test_elapsed_open_slot_expires(self, make_appointment) -> None:
        """Should mark an elapsed open slot as expired."""
        slot = make_appointment("08:00", patient_id=None)
        assert is_expired_open_slot(slot, datetime(2099, 3, 10, 8, 31)) is True
        assert is_expired_open_slot(slot, datetime(2099, 3, 10, 8, 30)) is False

    def test_booked_visit_never_expires(self, make_appointment) -> None:
        """Should leave booked visits alone."""
        visit = make_appointment("08:00")
        assert is_expired_open_slot(visit, datetime(2099, 3, 10, 12, 0)) is False

    def test_overlay_returns_new_instances(self, make_appointment) -> None:
        """Should overlay expired without touching the input records."""
        slot = make_appointment("08:00", patient_id=None)
        visit = make_appointment("08:30")
        corrected = apply_view_corrections([slot, visit], datetime(2099, 3, 10, 12, 0))
        assert [a.status for a in corrected] == [AppointmentStatus.EXPIRED, S]
        assert slot.status == S
        assert corrected[1] is visit


class TestMergeServerEcho:
    """Tests for folding server echoes into local state."""

    @pytest.mark.parametrize(
        ("local", "echo", "expected"),
        [
            (S, S, S),
            (S, C, C),
            (C, S, C),
            (C, C, C),
            (X, S, X),
            (S, X, X),
            (C, X, X),
            (X, C, X),
        ],
    )
    def test_merge_matrix(self, make_appointment, local, echo, expected) -> None:
        """Should let cancelled win, then completed, then the echo."""
        mine = make_appointment("09:00", status=local, appointment_id="5")
        theirs = make_appointment("09:00", status=echo, appointment_id="5")
        assert merge_server_echo(mine, theirs).status == expected

    def test_echo_fields_are_taken(self, make_appointment) -> None:
        """Should keep the echo's other fields."""
        mine = make_appointment("09:00", status=C, appointment_id="5", patient_name="Old Name")
        theirs = make_appointment("09:00", appointment_id="5", patient_name="New Name")
        merged = merge_server_echo(mine, theirs)
        assert merged.patient_name == "New Name"
        assert merged.status == C

    def test_no_local_record(self, make_appointment) -> None:
        """Should take the echo when nothing is known locally."""
        echo = make_appointment("09:00")
        assert merge_server_echo(None, echo) is echo
