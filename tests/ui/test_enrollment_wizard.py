# -*- coding: utf-8 -*-
"""
Tests for the Enrollment Wizard controller.

Tests cover:
- Wizard initialization
- Entry guards and redirects
- Step navigation with validation
- Draft persistence through the wizard
- Review, submission and retry
"""

import pytest
from PyQt5.QtCore import pyqtSignal

from repositories.draft_repository import InMemoryDraftStorage
from services.draft_store import DraftStore
from services.submission_service import SimulatedSubmissionService
from services.wizard.steps import WizardStep
from ui.wizards.enrollment import EnrollmentContext, EnrollmentWizard
from ui.wizards.framework import StepNavigator


@pytest.fixture
def service(qapp):
    return SimulatedSubmissionService(delay_ms=10)


@pytest.fixture
def wizard(draft_store, service):
    """Create wizard instance for testing."""
    return EnrollmentWizard(draft_store, submission_service=service)


@pytest.fixture
def review_wizard(wizard, step1_values, step2_values, step3_values):
    """Wizard advanced through all data steps to the review step."""
    assert wizard.advance(step1_values) == {}
    assert wizard.advance(step2_values) == {}
    assert wizard.advance(step3_values) == {}
    assert wizard.current_step is WizardStep.REVIEW
    return wizard


class TestWizardInitialization:
    """Test wizard initialization and setup."""

    def test_wizard_has_context(self, wizard):
        assert isinstance(wizard.context, EnrollmentContext)
        assert wizard.context.draft_store is wizard.draft_store

    def test_wizard_starts_at_first_step(self, wizard):
        assert wizard.current_step is WizardStep.STEP_1
        assert wizard.current_title == "Student Details"
        assert wizard.progress_percentage() == 25.0

    def test_reference_number_generated(self, wizard):
        assert wizard.context.reference_number.startswith("ENR-")

    def test_every_navigator_signal_is_relayed(self, wizard):
        navigator_signals = {
            name for name, value in vars(StepNavigator).items()
            if isinstance(value, pyqtSignal)
        }
        assert navigator_signals == {"step_changed", "redirected", "validation_failed"}
        assert all(hasattr(EnrollmentWizard, name) for name in navigator_signals)

    def test_context_summary(self, wizard, step1_values):
        wizard.advance(step1_values)
        summary = wizard.context.get_summary()
        assert summary["full_name"] == "Aarav Sharma"
        assert summary["completed_steps"] == 1
        assert wizard.context.to_dict()["current_step"] == "step-2"


class TestEntryGuards:
    """Test can_enter() and enter()."""

    def test_empty_record_only_allows_step_1(self, wizard):
        for step in (WizardStep.STEP_2, WizardStep.STEP_3, WizardStep.REVIEW):
            assert wizard.can_enter(step) is WizardStep.STEP_1
        assert wizard.can_enter(WizardStep.STEP_1) is WizardStep.STEP_1

    def test_step_2_needs_step_1_fields(self, wizard, draft_store, step1_values):
        draft_store.patch(step1_values)
        assert wizard.can_enter(WizardStep.STEP_2) is WizardStep.STEP_2

    def test_step_3_without_subjects_redirects_to_step_2(self, wizard, draft_store, step1_values):
        draft_store.patch(step1_values)
        assert wizard.can_enter(WizardStep.STEP_3) is WizardStep.STEP_2

    def test_step_1_checked_before_step_2(self, wizard, draft_store, step2_values):
        draft_store.patch(step2_values)
        assert wizard.can_enter(WizardStep.STEP_3) is WizardStep.STEP_1

    def test_blank_values_count_as_absent(self, wizard, draft_store, step1_values, step2_values):
        draft_store.patch({**step1_values, **step2_values, "email": "   "})
        assert wizard.can_enter(WizardStep.STEP_3) is WizardStep.STEP_1

        draft_store.patch({"email": "aarav@example.com", "subjects": []})
        assert wizard.can_enter(WizardStep.STEP_3) is WizardStep.STEP_2

    def test_review_needs_step_3_fields(self, wizard, draft_store, step1_values, step2_values):
        draft_store.patch({**step1_values, **step2_values, "pin_code": "110001"})
        assert wizard.can_enter(WizardStep.REVIEW) is WizardStep.STEP_3

        draft_store.patch({"guardian_mobile": "9123456780"})
        assert wizard.can_enter(WizardStep.REVIEW) is WizardStep.REVIEW

    def test_review_does_not_need_exam_goal(self, wizard, draft_store, step1_values,
                                            step2_values, step3_values):
        draft_store.patch({**step1_values, "subjects": step2_values["subjects"], **step3_values})

        assert wizard.record.exam_goal is None
        assert wizard.can_enter(WizardStep.REVIEW) is WizardStep.REVIEW
        assert wizard.can_enter(WizardStep.STEP_3) is WizardStep.STEP_2

    def test_submitted_is_never_entered_directly(self, wizard, draft_store, valid_values):
        draft_store.patch(valid_values)
        assert wizard.enter(WizardStep.SUBMITTED) is WizardStep.REVIEW
        assert wizard.current_step is WizardStep.REVIEW

    def test_enter_redirect_is_signalled(self, wizard, draft_store, step1_values, qtbot):
        draft_store.patch(step1_values)

        with qtbot.waitSignal(wizard.redirected, timeout=1000) as blocker:
            shown = wizard.enter(WizardStep.STEP_3)

        assert shown is WizardStep.STEP_2
        assert blocker.args == ["step-3", "step-2"]
        assert wizard.current_step is WizardStep.STEP_2

    def test_enter_allowed_step(self, wizard, draft_store, step1_values):
        draft_store.patch(step1_values)
        assert wizard.enter(WizardStep.STEP_2) is WizardStep.STEP_2
        assert wizard.progress_percentage() == 50.0


class TestNavigation:
    """Test advance() and go_back()."""

    def test_invalid_values_block_advance(self, wizard, step1_values, qtbot):
        step1_values["mobile"] = "12345"

        with qtbot.waitSignal(wizard.validation_failed, timeout=1000) as blocker:
            errors = wizard.advance(step1_values)

        assert list(errors) == ["mobile"]
        assert blocker.args[0] == errors
        assert wizard.current_step is WizardStep.STEP_1
        assert wizard.record.is_empty()

    def test_valid_values_are_saved_and_advance(self, wizard, step1_values):
        assert wizard.advance(step1_values) == {}
        assert wizard.current_step is WizardStep.STEP_2
        assert wizard.record.full_name == "Aarav Sharma"
        assert wizard.context.is_step_completed("step-1")

    def test_step_2_candidate_includes_stored_class_level(self, wizard, step1_values, step2_values):
        step1_values["class_level"] = "11"
        wizard.advance(step1_values)

        errors = wizard.advance(step2_values)
        assert errors == {"subjects": "Select at least 3 subjects for Class 11"}
        assert wizard.current_step is WizardStep.STEP_2

    def test_stored_values_fill_unsubmitted_fields(self, wizard, step1_values):
        wizard.advance(step1_values)
        wizard.go_back()

        assert wizard.advance({"full_name": "Aarav Kumar"}) == {}
        assert wizard.record.full_name == "Aarav Kumar"
        assert wizard.record.email == step1_values["email"]

    def test_values_for_other_steps_are_ignored(self, wizard, step1_values):
        values = {**step1_values, "subjects": ["Mathematics"], "pin_code": "abc"}

        assert wizard.advance(values) == {}
        assert wizard.current_step is WizardStep.STEP_2
        assert wizard.record.full_name == "Aarav Sharma"
        assert wizard.record.subjects is None
        assert wizard.record.pin_code is None

    def test_go_back_always_allowed(self, review_wizard):
        assert review_wizard.go_back() is True
        assert review_wizard.current_step is WizardStep.STEP_3
        assert review_wizard.go_back() is True
        assert review_wizard.go_back() is True
        assert review_wizard.current_step is WizardStep.STEP_1

    def test_go_back_on_first_step_is_noop(self, wizard):
        assert wizard.go_back() is False
        assert wizard.current_step is WizardStep.STEP_1

    def test_step_changes_are_signalled(self, wizard, step1_values):
        changes = []
        wizard.step_changed.connect(lambda old, new: changes.append((old, new)))

        wizard.advance(step1_values)
        wizard.go_back()

        assert changes == [("step-1", "step-2"), ("step-2", "step-1")]

    def test_progress_through_steps(self, review_wizard):
        assert review_wizard.progress_percentage() == 100.0


class TestDraftPersistence:
    """Test that wizard edits survive a restart."""

    def test_resume_from_persisted_draft(self, qtbot, step1_values, step2_values):
        storage = InMemoryDraftStorage()
        store = DraftStore(storage, debounce_ms=10)
        wizard = EnrollmentWizard(store, submission_service=SimulatedSubmissionService(10))

        with qtbot.waitSignal(store.draft_saved, timeout=2000):
            wizard.advance(step1_values)
            wizard.advance(step2_values)

        resumed = EnrollmentWizard(
            DraftStore(storage), submission_service=SimulatedSubmissionService(10)
        )
        assert resumed.enter(WizardStep.REVIEW) is WizardStep.STEP_3
        assert resumed.record.subjects == step2_values["subjects"]

    def test_clear_draft_restarts(self, review_wizard, storage):
        review_wizard.draft_store.flush()

        review_wizard.clear_draft()

        assert review_wizard.current_step is WizardStep.STEP_1
        assert review_wizard.record.is_empty()
        assert review_wizard.context.completed_steps == set()
        assert storage.read(review_wizard.draft_store.storage_key) is None


class TestCollaborators:
    """Test subject options and location pre-fill."""

    def test_subject_options_default_to_class_10(self, wizard):
        assert "Hindi/Sanskrit" in wizard.subject_options()

    def test_subject_options_follow_class(self, wizard, draft_store):
        draft_store.patch({"class_level": "12"})
        assert "Physics" in wizard.subject_options()

    def test_location_prefill(self, wizard, draft_store):
        assert wizard.location_prefill("560001") == {"state": "Karnataka", "city": "Bengaluru"}
        assert wizard.location_prefill("123456") is None

        draft_store.patch({"pin_code": "700001"})
        assert wizard.location_prefill() == {"state": "West Bengal", "city": "Kolkata"}


class TestReviewAndSubmit:
    """Test the review step and submission."""

    def test_review_summary(self, review_wizard):
        titles = [section.title for section in review_wizard.review_summary()]
        assert titles == ["Student Details", "Academic Details", "Address & Guardian"]

    def test_submit_only_from_review(self, wizard):
        assert wizard.submit() is None

    def test_successful_submission_completes_wizard(self, review_wizard, service, qtbot):
        with qtbot.waitSignal(review_wizard.wizard_completed, timeout=2000) as blocker:
            result = review_wizard.submit()

        assert result.is_valid
        assert blocker.args[0]["status"] == "received"
        assert review_wizard.current_step is WizardStep.SUBMITTED
        assert review_wizard.progress_percentage() == 100.0
        assert review_wizard.record.is_empty()
        assert review_wizard.context.status == EnrollmentContext.STATUS_COMPLETED
        assert len(service.submitted) == 1

    def test_advance_on_review_submits(self, review_wizard, qtbot):
        with qtbot.waitSignal(review_wizard.wizard_completed, timeout=2000):
            assert review_wizard.advance() == {}

    def test_no_navigation_after_submission(self, review_wizard, qtbot):
        with qtbot.waitSignal(review_wizard.wizard_completed, timeout=2000):
            review_wizard.submit()

        assert review_wizard.go_back() is False
        assert review_wizard.enter(WizardStep.STEP_1) is WizardStep.SUBMITTED

    def test_navigation_refused_while_in_flight(self, review_wizard, qtbot):
        with qtbot.waitSignal(review_wizard.wizard_completed, timeout=2000):
            review_wizard.submit()
            assert review_wizard.is_submitting

            assert review_wizard.go_back() is False
            assert review_wizard.enter(WizardStep.STEP_1) is WizardStep.REVIEW
            assert review_wizard.advance() == {}
            review_wizard.clear_draft()
            assert review_wizard.current_step is WizardStep.REVIEW
            assert not review_wizard.record.is_empty()

        assert not review_wizard.is_submitting
        assert review_wizard.current_step is WizardStep.SUBMITTED

    def test_completion_is_forced_from_any_step(self, wizard):
        assert wizard.navigator.complete() is False
        assert wizard.navigator.complete(force=True) is True
        assert wizard.current_step is WizardStep.SUBMITTED
        assert wizard.navigator.complete(force=True) is False

    def test_failed_submission_keeps_record_and_allows_retry(self, review_wizard, service, qtbot):
        service.fail_with = "Server unavailable"
        before = review_wizard.record

        with qtbot.waitSignal(review_wizard.submission_failed, timeout=2000) as blocker:
            review_wizard.submit()

        assert blocker.args == ["Server unavailable"]
        assert review_wizard.current_step is WizardStep.REVIEW
        assert review_wizard.record == before
        assert review_wizard.submission.result.retryable

        service.fail_with = None
        with qtbot.waitSignal(review_wizard.wizard_completed, timeout=2000):
            review_wizard.submit()
        assert review_wizard.current_step is WizardStep.SUBMITTED

    def test_submit_ignored_while_in_flight(self, review_wizard, service, qtbot):
        with qtbot.waitSignal(review_wizard.wizard_completed, timeout=2000):
            assert review_wizard.submit() is not None
            assert review_wizard.submit() is None

        assert len(service.submitted) == 1

    def test_invalid_record_redirects_to_owning_step(self, review_wizard, draft_store, qtbot):
        draft_store.patch({"guardian_mobile": "12345"})

        with qtbot.waitSignal(review_wizard.redirected, timeout=1000) as blocker:
            result = review_wizard.submit()

        assert result.redirect is WizardStep.STEP_3
        assert blocker.args == ["review", "step-3"]
        assert review_wizard.current_step is WizardStep.STEP_3
        assert review_wizard.last_errors == {
            "guardian_mobile": "Enter a valid 10-digit guardian mobile number"
        }

    def test_redirect_prefers_step_1(self, review_wizard, draft_store):
        draft_store.patch({"email": "broken", "city": "X"})

        result = review_wizard.submit()

        assert result.redirect is WizardStep.STEP_1
        assert review_wizard.current_step is WizardStep.STEP_1
