"""
Tests for the mode B workflow state machine.
"""

from dataclasses import replace

import pytest

from promocheck.errors import InvalidTransitionError
from promocheck.findings import ViewOptions
from promocheck.obligations import with_category
from promocheck.workflow import ComplianceWorkflow, WorkflowStage

DOCUMENT = (
    "Document à caractère promotionnel. Le fonds Horizon Actions Europe est un OPCVM "
    "investi en actions européennes. Risque de perte en capital. Frais d'entrée : 2 %. "
    "Avant tout investissement, consultez le DIC disponible auprès de la société de gestion."
)


@pytest.fixture
def workflow():
    return ComplianceWorkflow()


@pytest.fixture
def reviewed(workflow):
    workflow.qualify(DOCUMENT)
    return workflow


class TestQualifyStep:
    def test_starts_on_upload(self, workflow):
        assert workflow.stage is WorkflowStage.upload
        assert workflow.error is None

    def test_short_content_rejected(self, workflow):
        assert workflow.qualify("Trop court.") is None
        assert workflow.stage is WorkflowStage.upload
        assert workflow.error.kind == "validation"
        assert "at least 100 characters" in workflow.error.message

    def test_qualify_moves_to_review(self, workflow):
        qualification = workflow.qualify(DOCUMENT)
        assert qualification is not None
        assert workflow.stage is WorkflowStage.review
        assert workflow.qualification == qualification

    def test_set_content_then_qualify(self, workflow):
        workflow.set_content(DOCUMENT)
        assert workflow.qualify() is not None
        assert workflow.content == DOCUMENT

    def test_internal_failure_returns_to_upload(self, workflow, monkeypatch):
        def broken(content):
            raise RuntimeError("boom")
        monkeypatch.setattr("promocheck.workflow.qualify", broken)

        assert workflow.qualify(DOCUMENT) is None
        assert workflow.stage is WorkflowStage.upload
        assert workflow.error.kind == "internal"
        assert "boom" not in workflow.error.message


class TestReviewStep:
    def test_update_qualification(self, reviewed):
        edited = with_category(reviewed.qualification, "SCPI")
        reviewed.update_qualification(edited)
        assert reviewed.qualification.product.category == "SCPI"

    def test_update_outside_review_rejected(self, workflow):
        with pytest.raises(InvalidTransitionError):
            workflow.update_qualification(None)

    def test_edit_content_goes_back(self, reviewed):
        reviewed.edit_content()
        assert reviewed.stage is WorkflowStage.upload
        assert reviewed.qualification is None


class TestAnalyzeStep:
    def test_analyze_moves_to_results(self, reviewed):
        result = reviewed.analyze()
        assert result is not None
        assert reviewed.stage is WorkflowStage.results
        assert result.report.verdict == "compliant"

    def test_empty_qualification_stays_on_review(self, reviewed):
        reviewed.update_qualification(replace(reviewed.qualification, applicable_texts=()))
        assert reviewed.analyze() is None
        assert reviewed.stage is WorkflowStage.review
        assert reviewed.error.kind == "validation"

    def test_internal_failure_returns_to_review(self, reviewed, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")
        monkeypatch.setattr("promocheck.workflow.audit", broken)

        assert reviewed.analyze() is None
        assert reviewed.stage is WorkflowStage.review
        assert reviewed.error.kind == "internal"

    def test_retry_after_failure(self, reviewed, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")
        monkeypatch.setattr("promocheck.workflow.audit", broken)

        reviewed.analyze()
        monkeypatch.undo()
        assert reviewed.analyze() is not None
        assert reviewed.error is None

    def test_analyze_from_upload_rejected(self, workflow):
        with pytest.raises(InvalidTransitionError):
            workflow.analyze()


class TestResults:
    def test_grouped_findings(self, reviewed):
        reviewed.analyze()
        reviewed.set_view_options(ViewOptions(group_by="status"))
        groups = reviewed.grouped_findings
        assert [g.key for g in groups] == ["COMPLIANT"]

    def test_no_grouped_findings_before_results(self, reviewed):
        assert reviewed.grouped_findings == []

    def test_cannot_qualify_again_without_reset(self, reviewed):
        reviewed.analyze()
        with pytest.raises(InvalidTransitionError):
            reviewed.qualify(DOCUMENT)

    def test_reset_from_results(self, reviewed):
        reviewed.analyze()
        reviewed.reset()
        assert reviewed.stage is WorkflowStage.upload
        assert reviewed.content is None
        assert reviewed.qualification is None
        assert reviewed.result is None
