# -*- coding: utf-8 -*-
"""
Tests for the enrollment data models.

Tests cover:
- Merge semantics (last write wins, explicit None, unknown keys)
- Copy independence
- Dict conversion
- Payload serialization
"""

import pytest

from models.enrollment import (
    Board, ClassLevel, EnrollmentPayload, EnrollmentRecord, ExamGoal,
    PaymentMode, PaymentPlan, PreferredLanguage,
)


class TestEnrollmentRecord:
    """Test the in-progress record."""

    def test_new_record_is_empty(self):
        record = EnrollmentRecord()
        assert record.is_empty()
        assert record.present_fields() == {}

    def test_field_names_in_declaration_order(self):
        names = EnrollmentRecord.field_names()
        assert names[0] == "full_name"
        assert names[-1] == "payment_mode"
        assert len(names) == 20

    def test_merge_disjoint_keys_keeps_both(self):
        record = EnrollmentRecord()
        record.merge({"full_name": "Aarav Sharma"})
        record.merge({"pin_code": "110001"})

        assert record.full_name == "Aarav Sharma"
        assert record.pin_code == "110001"

    def test_merge_overlapping_key_last_write_wins(self):
        record = EnrollmentRecord()
        record.merge({"city": "Mumbai"})
        record.merge({"city": "Pune"})
        assert record.city == "Pune"

    def test_merge_explicit_none_clears_field(self):
        record = EnrollmentRecord(achievements="Olympiad finalist")
        record.merge({"achievements": None})
        assert record.achievements is None

    def test_merge_ignores_unknown_keys(self):
        record = EnrollmentRecord()
        record.merge({"nickname": "Ace", "city": "Pune"})
        assert record.city == "Pune"
        assert "nickname" not in record.to_dict()

    def test_merge_stores_enum_values(self):
        record = EnrollmentRecord()
        record.merge({"class_level": ClassLevel.CLASS_11, "subjects": ("Physics", "Chemistry")})
        assert record.class_level == "11"
        assert record.subjects == ["Physics", "Chemistry"]

    def test_copy_is_independent(self):
        record = EnrollmentRecord(subjects=["English"])
        clone = record.copy()
        clone.subjects.append("Hindi")

        assert record.subjects == ["English"]
        assert clone == EnrollmentRecord(subjects=["English", "Hindi"])

    def test_from_dict_round_trip(self, valid_values):
        record = EnrollmentRecord.from_dict(valid_values)
        assert EnrollmentRecord.from_dict(record.to_dict()) == record

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            EnrollmentRecord.from_dict(["full_name", "Aarav"])


class TestEnrollmentPayload:
    """Test the validated payload."""

    def test_to_dict_uses_enum_values(self):
        payload = EnrollmentPayload(
            full_name="Aarav Sharma",
            email="aarav@example.com",
            mobile="9876543210",
            class_level=ClassLevel.CLASS_10,
            board=Board.CBSE,
            preferred_language=PreferredLanguage.HINGLISH,
            subjects=["Mathematics", "Science"],
            exam_goal=ExamGoal.CONCEPT_MASTERY,
            weekly_study_hours=10,
            scholarship=False,
            pin_code="400001",
            state="Maharashtra",
            city="Mumbai",
            address_line="221 Marine Drive Road",
            guardian_name="Meera Sharma",
            guardian_mobile="9123456780",
            payment_plan=PaymentPlan.HALF_YEARLY,
            payment_mode=PaymentMode.NET_BANKING,
        )
        body = payload.to_dict()

        assert body["class_level"] == "10"
        assert body["preferred_language"] == "Hinglish"
        assert body["payment_plan"] == "Half-Yearly"
        assert body["payment_mode"] == "NetBanking"
        assert body["last_exam_percentage"] is None
