"""
End-to-end tests for the ACM eligibility engine
"""
import importlib

import pytest

from acm_calculator.exceptions import BlockedError, InputValidationError
from acm_calculator.models import RateTable, TrainingEventInput
from acm_calculator.models.acm import ClaimDocKey, DocumentTable, InhouseRates
from acm_calculator.models.training import ProgrammeVariant, Scheme
from acm_calculator.services.context import WarningLog, WarningStage
from acm_calculator.services.snapshot_service import SnapshotStore
from acm_calculator.services.variant_handlers import HANDLERS

eligibility_module = importlib.import_module("acm_calculator.services.eligibility_service")


class TestReferenceScenario:
    def test_inhouse_external_own_premises_ten_pax(self, calculate):
        result = calculate()
        assert [item.key for item in result.items] == [
            "course_fee", "meal_allowance", "consumable_materials"
        ]
        assert result.item("course_fee").amount == 10500
        assert result.item("meal_allowance").amount == 1000
        assert result.total_claimable == 11600
        assert result.acm_edition == "November 2025"
        assert result.version.acm_guide_edition == "September 2025"
        assert result.version.last_reviewed is not None

    def test_accepts_model_input(self, service, baseline, make_event):
        event = TrainingEventInput.model_validate(make_event())
        assert service.calculate(event, snapshot=baseline).total_claimable == 11600

    def test_remote_inhouse_own_premises(self, calculate):
        result = calculate(programme_variant="rot_inhouse")
        assert result.item("course_fee").amount == 10500
        assert result.item("air_ticket") is None
        assert any(w.startswith("ROT (Remote Online Training)") for w in result.warnings)


class TestParticipantCap:
    @pytest.mark.parametrize("category,trainers,cap", [
        ("general", 1, 50),
        ("general_non_technical", 2, 100),
        ("general_technical", 1, 25),
        ("general_technical", 3, 75),
    ])
    def test_cap_boundary(self, calculate, category, trainers, cap):
        result = calculate(course_category=category, number_of_trainers=trainers, host={"pax": cap})
        assert result.total_claimable > 0

        with pytest.raises(BlockedError) as exc_info:
            calculate(course_category=category, number_of_trainers=trainers, host={"pax": cap + 1})
        assert exc_info.value.cap == cap
        assert exc_info.value.total_pax == cap + 1

    def test_cap_counts_every_group(self, calculate):
        with pytest.raises(BlockedError):
            calculate(host={"pax": 30}, branches=[{"pax": 15}], other_employers=[{"pax": 6}])

    def test_blocked_error_details(self, calculate):
        with pytest.raises(BlockedError) as exc_info:
            calculate(course_category="general_technical", host={"pax": 26})
        data = exc_info.value.to_dict()
        assert data["category"] == "Technical"
        assert data["cap"] == 25
        assert "Pax limit exceeded" in data["message"]

    def test_non_general_courses_are_not_capped(self, calculate):
        result = calculate(course_category="industry_specific", host={"pax": 60})
        assert result.item("course_fee").is_estimate

    def test_public_training_is_not_capped(self, calculate):
        result = calculate(programme_variant="public", host={"pax": 60})
        assert result.item("course_fee").amount == 1750 * 9


class TestInputValidation:
    @pytest.mark.parametrize("overrides", [
        {"host": {"pax": -1}},
        {"days": 0},
        {"extra_days": 3},
        {"elearning_hours": 0},
        {"number_of_trainers": 0},
        {"scheme": "abc"},
        {"programme_variant": "webinar"},
        {"actual_fee_per_head": -10},
    ])
    def test_malformed_input_rejected(self, calculate, overrides):
        with pytest.raises(InputValidationError) as exc_info:
            calculate(**overrides)
        assert exc_info.value.errors

    def test_missing_host_rejected(self, service, baseline):
        with pytest.raises(InputValidationError):
            service.calculate({"scheme": "hcc"}, snapshot=baseline)

    def test_other_employers_only_for_inhouse(self, calculate):
        with pytest.raises(InputValidationError) as exc_info:
            calculate(programme_variant="public", other_employers=[{"pax": 3}])
        assert "other_employers" in str(exc_info.value)

    def test_input_error_is_value_error(self, calculate):
        with pytest.raises(ValueError):
            calculate(days=-2)


class TestWarnings:
    def test_scheme_restriction_first_attendance_last(self, calculate):
        result = calculate(scheme="slb", trainer_type="overseas", host={"pax": 3})
        assert result.warnings[0].startswith("SLB scheme does not support overseas trainers")
        assert result.warnings[-1].startswith("Attendance must be")

    def test_slb_unsupported_variant(self, calculate):
        result = calculate(scheme="slb", programme_variant="public", host={"pax": 3})
        assert any("does not cover the selected training type (public)" in w for w in result.warnings)

    def test_slb_without_other_employers(self, calculate):
        result = calculate(scheme="slb")
        assert any("requires at least one participating employer" in w for w in result.warnings)

    def test_minimum_face_to_face_pax(self, calculate):
        result = calculate(host={"pax": 1})
        assert any("Minimum 2 participants" in w for w in result.warnings)

    def test_audit_risk_above_threshold(self, calculate):
        result = calculate(host={"pax": 26})
        assert any(w.startswith("Medium audit risk") for w in result.warnings)

    def test_seminar_speakers(self, calculate):
        result = calculate(programme_variant="seminar_conference", number_of_speakers=1)
        assert any("minimum of 2 speaker(s)" in w for w in result.warnings)

    def test_development_minimum_months(self, calculate):
        result = calculate(programme_variant="development", development={"months": 2})
        assert any("Minimum course duration" in w for w in result.warnings)
        assert result.item("course_fee") is not None

    def test_stage_order(self, calculate):
        result = calculate(
            scheme="slb",
            course_category="general",
            host={"pax": 2},
            other_employers=[{"pax": 1}],
        )
        warnings = result.warnings
        prorate = next(i for i, w in enumerate(warnings) if w.startswith("Compliance note"))
        sharing = next(i for i, w in enumerate(warnings) if w.startswith("SLB - Cost Sharing"))
        attendance = next(i for i, w in enumerate(warnings) if w.startswith("Attendance"))
        assert prorate < sharing < attendance


class TestResultInvariants:
    EVENTS = [
        {},
        {"venue": "external_hotel", "branches": [{"pax": 3, "distance": "over_100"}]},
        {"trainer_type": "internal", "duration": "half_day", "days": 2},
        {"programme_variant": "public", "host": {"pax": 12}, "actual_fee_per_head": 2500},
        {"programme_variant": "elearning", "elearning_hours": 9},
        {"programme_variant": "overseas", "extra_days": 1},
        {"programme_variant": "development", "development": {"level": "phd", "months": 6}},
        {"scheme": "slb", "other_employers": [{"pax": 4}], "has_licensed_materials": True},
    ]

    @pytest.mark.parametrize("overrides", EVENTS)
    def test_total_is_sum_of_numeric_amounts(self, calculate, overrides):
        result = calculate(**overrides)
        assert result.total_claimable == sum(i.amount for i in result.items if i.amount is not None)
        assert result.total_deficit == sum(i.deficit for i in result.items)

    @pytest.mark.parametrize("overrides", EVENTS)
    def test_deterministic(self, calculate, overrides):
        assert calculate(**overrides).model_dump() == calculate(**overrides).model_dump()

    def test_every_variant_has_a_handler(self):
        assert set(HANDLERS) == set(ProgrammeVariant)


class TestSnapshotOverrides:
    def test_rate_override_for_one_call(self, service, baseline, make_event):
        rates = RateTable(inhouse=InhouseRates(full_day=12000))
        result = service.calculate(make_event(), snapshot=baseline, rates=rates)
        assert result.item("course_fee").amount == 12000
        assert service.calculate(make_event(), snapshot=baseline).item("course_fee").amount == 10500


class TestDocumentChecklist:
    def texts(self, result):
        return [doc.text for doc in result.document_checklist.grant_submission]

    def test_hcc_inhouse(self, calculate):
        texts = self.texts(calculate())
        assert texts[0] == "Course content with training schedule, including date and time"
        assert "Accredited trainer profile" in texts
        assert "Invoice or quotation for course fees" in texts
        assert any(t.startswith("HRD Corp Special Approval Letter (if any)") for t in texts)

    def test_slb_joint_training_letter(self, calculate):
        result = calculate(scheme="slb", other_employers=[{"pax": 2}])
        letter = next(
            doc for doc in result.document_checklist.grant_submission
            if doc.text.startswith("Joint Training Letter")
        )
        assert len(letter.sub_items) == 7

    def test_rot_attendance_report(self, calculate):
        texts = self.texts(calculate(programme_variant="rot_inhouse"))
        assert any(t.startswith("System Generated Attendance Report") for t in texts)

    def test_item_specific_documents(self, calculate):
        result = calculate(
            venue="external_hotel",
            has_licensed_materials=True,
        )
        texts = self.texts(result)
        assert any(t.startswith("Air Ticket:") for t in texts)
        assert any(t.startswith("Chartered Transport:") for t in texts)
        assert any(t.startswith("Licensed Training Materials (LTM)") for t in texts)
        assert any("REQUIRED" in t for t in texts)

    def test_sbl_development_requires_mqa(self, calculate):
        texts = self.texts(calculate(scheme="sbl", programme_variant="development"))
        assert texts[0].startswith("Complete course syllabus")
        assert any(t.startswith("MQA Certificate") for t in texts)
        assert "Trainer profile" not in texts

    def test_claim_documents_on_items(self, calculate):
        result = calculate(scheme="sbl")
        assert result.item("course_fee").required_document == "Official receipt and proof of payment"
        hcc = calculate()
        assert hcc.item("course_fee").required_document == "Invoice issued to HRD Corp"


class TestDocumentTableOverride:
    def test_grant_docs_override_reaches_checklist(self, service, baseline, make_event):
        documents = DocumentTable(
            grant_docs={"hcc": ["Board resolution approving the training"]},
            claim_docs={"course_fee_hcc": "Tax invoice addressed to HRD Corp", "consumable": "Receipts above {limit}"},
        )
        result = service.calculate(make_event(), snapshot=baseline, documents=documents)
        texts = [doc.text for doc in result.document_checklist.grant_submission]
        assert texts[0] == "Board resolution approving the training"
        assert "Accredited trainer profile" not in texts
        assert "Consumable Training Materials: Receipts above RM100" in texts
        assert result.item("course_fee").required_document == "Tax invoice addressed to HRD Corp"
        assert result.item("consumable_materials").required_document == "Receipts above RM100"

    def test_grant_entry_with_sub_items(self, service, baseline, make_event):
        documents = DocumentTable(grant_docs={"hcc": [{"text": "Group letter", "sub_items": ["Signed"]}]})
        result = service.calculate(make_event(), snapshot=baseline, documents=documents)
        first = result.document_checklist.grant_submission[0]
        assert first.text == "Group letter"
        assert first.sub_items == ["Signed"]

    def test_consumable_limit_follows_rate_table(self, calculate):
        result = calculate()
        assert result.item("consumable_materials").required_document.startswith("No receipt needed if total <= RM100")


class TestSnapshotImmutability:
    def test_tables_cannot_be_changed_in_place(self, baseline):
        with pytest.raises(TypeError):
            baseline.rates.elearning.hour_table[7] = 1
        with pytest.raises(TypeError):
            baseline.schemes[Scheme.HCC] = baseline.schemes[Scheme.SBL]
        with pytest.raises(TypeError):
            baseline.documents.claim_docs[ClaimDocKey.NONE] = "changed"
        with pytest.raises(AttributeError):
            baseline.matrix.append(baseline.matrix[0])

    def test_read_only_tables_serialise_as_plain_json(self, baseline):
        data = baseline.model_dump(mode="json")
        assert data["rates"]["elearning"]["hour_table"]["7"] == 875
        assert set(data["schemes"]) == {"hcc", "sbl", "slb"}
        assert isinstance(data["matrix"], list)


class TestInFlightSnapshot:
    def test_calculation_keeps_snapshot_captured_at_entry(self, service, baseline, make_event, monkeypatch):
        store = SnapshotStore(baseline)
        monkeypatch.setattr(eligibility_module.snapshot_service, "store", store)
        repriced = baseline.with_overrides(rates=RateTable(inhouse=InhouseRates(full_day=20000)))
        real_handler_for = eligibility_module.handler_for

        def publish_during_calculation(variant):
            store.publish(repriced)
            return real_handler_for(variant)

        monkeypatch.setattr(eligibility_module, "handler_for", publish_during_calculation)

        result = service.calculate(make_event())

        assert result.item("course_fee").amount == 10500
        assert store.current() is repriced
        assert service.calculate(make_event()).item("course_fee").amount == 20000


class TestWarningLog:
    def test_orders_by_stage_and_drops_repeats(self):
        log = WarningLog()
        log.add(WarningStage.ATTENDANCE, "attendance")
        log.add(WarningStage.SCHEME, "scheme")
        log.add(WarningStage.CAP, "cap")
        log.add(WarningStage.DOCUMENTS, "scheme")
        assert log.ordered() == ["scheme", "cap", "attendance"]
        assert len(log) == 3
