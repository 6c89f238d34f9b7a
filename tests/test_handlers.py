"""
Tests for topic specialists and the four domain handlers.
"""

from typing import List, Tuple

import pytest

from askrexi.agents.application import (
    AnalyticsHandler, AssessmentHandler, EMASpecialist, FDASpecialist,
    GeneralComplianceHandler, GeneralRegulatorySpecialist, ICHSpecialist,
    RegulatoryHandler
)
from askrexi.agents.application.handlers import out_of_scope_topic
from askrexi.agents.domain import Fault, Matched, NoMatch, SessionContext
from askrexi.agents.domain.composer import FDA_AI_ML_URL
from askrexi.config import ImpactLevel, ResponseCategory
from askrexi.core import HandlerFaultException, KnowledgeStoreException
from askrexi.knowledge.application import (
    AssessmentQuestionLookupService, IAssessmentQuestionStore, KnowledgeLookupService,
    RegulatoryIntelligenceLookupService
)
from askrexi.knowledge.domain import AssessmentQuestion, normalize_question
from askrexi.knowledge.infrastructure import (
    InMemoryAssessmentQuestionStore, InMemoryKnowledgeStore, InMemoryRegulatoryIntelligenceStore
)


class ExplodingAssessmentHandler(AssessmentHandler):
    """Assessment handler whose branch step always fails."""

    async def _match_branches(self, question, normalized):
        raise RuntimeError("branch table corrupted")


class UnavailableQuestionStore(IAssessmentQuestionStore):
    async def search(self, terms: Tuple[str, ...], limit: int) -> List[AssessmentQuestion]:
        raise KnowledgeStoreException("question bank offline")


class TestTopicSpecialists:
    """Branch answers and delegation back to the handler."""

    def test_fda_action_plan_from_guideline_phrasing(self, composer):
        outcome = FDASpecialist().answer(
            normalize_question("What are the FDA guidelines for AI in drug development?"),
            composer, "regulatory", ResponseCategory.REGULATORY,
        )

        assert isinstance(outcome, Matched)
        assert outcome.response.subcategory == "FDA AI/ML Action Plan"
        assert outcome.response.sub_agent_used == "fda"
        assert outcome.response.agent_used == "regulatory"
        assert outcome.response.confidence == 0.95
        assert outcome.response.impact_level == ImpactLevel.HIGH

    def test_fda_part_11(self, composer):
        outcome = FDASpecialist().answer(
            "how does part 11 apply to electronic records", composer, "regulatory", ResponseCategory.REGULATORY
        )

        assert outcome.response.subcategory == "21 CFR Part 11"

    def test_ema_gdpr(self, composer):
        outcome = EMASpecialist().answer(
            "how does gdpr apply to training data", composer, "regulatory", ResponseCategory.REGULATORY
        )

        assert outcome.response.subcategory == "GDPR Compliance"
        assert outcome.response.sub_agent_used == "ema"

    def test_ich_e6(self, composer):
        outcome = ICHSpecialist().answer(
            "what changed in ich e6", composer, "regulatory", ResponseCategory.REGULATORY
        )

        assert outcome.response.subcategory == "ICH E6(R3) Good Clinical Practice"
        assert outcome.response.confidence == 0.95

    def test_general_regulatory_intelligence_is_medium_impact(self, composer):
        outcome = GeneralRegulatorySpecialist().answer(
            "any regulatory update this month", composer, "regulatory", ResponseCategory.REGULATORY
        )

        assert outcome.response.subcategory == "Regulatory Intelligence"
        assert outcome.response.impact_level == ImpactLevel.MEDIUM

    def test_no_branch_is_no_match(self, composer):
        outcome = EMASpecialist().answer("hello", composer, "regulatory", ResponseCategory.REGULATORY)

        assert isinstance(outcome, NoMatch)
        assert outcome.step == "ema"

    def test_keyword_score_is_a_ratio(self):
        specialist = GeneralRegulatorySpecialist()
        keywords = specialist.capability.keywords

        score = specialist.keyword_score("harmonization of quality standards")

        assert score == pytest.approx(3 / len(keywords))


class TestSpecialistSelection:
    """Authority names, topic routes, then keyword ratio."""

    @pytest.fixture
    def handler(self, composer):
        return RegulatoryHandler(composer)

    @pytest.mark.parametrize("question,expected", [
        ("What does the EMA say about clinical trials?", "ema"),
        ("Does the Food and Drug Administration review this?", "fda"),
        ("How should clinical trials handle informed consent?", "ich"),
        ("Is our machine learning model compliant?", "fda"),
        ("What about GDPR for patient records?", "ema"),
        ("Harmonization of quality standards", "general-regulatory"),
    ])
    def test_selects_specialist(self, handler, question, expected):
        specialist = handler.select_specialist(normalize_question(question))

        assert specialist is not None
        assert specialist.name == expected

    def test_no_overlap_selects_nobody(self, handler):
        assert handler.select_specialist("hello there") is None

    def test_specialists_in_declaration_order(self, handler):
        assert [s.name for s in handler.specialists] == ["fda", "ema", "ich", "general-regulatory"]


class TestRegulatoryHandler:
    @pytest.mark.asyncio
    async def test_specialist_answer(self, composer):
        response = await RegulatoryHandler(composer).process(
            "What are the FDA guidelines for AI in drug development?"
        )

        assert response.sub_agent_used == "fda"
        assert response.subcategory == "FDA AI/ML Action Plan"

    @pytest.mark.asyncio
    async def test_specialist_miss_falls_through_to_domain_branches(self, composer):
        response = await RegulatoryHandler(composer).process("What does the EMA say about compliance?")

        assert response.sub_agent_used is None
        assert response.subcategory == "compliance"
        assert response.confidence == 0.7

    @pytest.mark.asyncio
    async def test_clarification_when_nothing_matches(self, composer):
        response = await RegulatoryHandler(composer).process("What does the EMA say?")

        assert response.subcategory == "clarification"
        assert response.category == ResponseCategory.GENERAL
        assert response.confidence == 0.3
        assert "regulatory questions" in response.answer

    @pytest.mark.asyncio
    async def test_curated_entry_wins_over_specialist(self, composer, knowledge_entries):
        lookup = KnowledgeLookupService(InMemoryKnowledgeStore(knowledge_entries))
        handler = RegulatoryHandler(composer, lookup=lookup)

        response = await handler.process("What is the FDA AI/ML Action Plan?")

        assert response.answer.startswith("Curated:")
        assert response.confidence == 0.9
        assert response.sub_agent_used is None
        assert response.sources[0].title == "FDA AI/ML Action Plan"

    def test_capabilities(self, composer):
        capability = RegulatoryHandler(composer).get_capabilities()

        assert capability.domain == "regulatory"
        assert "EMA Requirements" in capability.subdomains


class TestAssessmentHandler:
    @pytest.mark.asyncio
    async def test_production_blocker(self, composer):
        response = await AssessmentHandler(composer).process("What are the production blocker requirements?")

        assert response.subcategory == "Production Blockers"
        assert response.impact_level == ImpactLevel.CRITICAL
        assert response.sources[0].url == "/assessment?filter=production-blockers"

    @pytest.mark.asyncio
    async def test_beginner_personalization(self, composer, beginner_context):
        response = await AssessmentHandler(composer).process(
            "How do I complete the data governance assessment?", beginner_context
        )

        assert response.subcategory == "Data Governance"
        assert "data governance" not in response.answer.lower()
        assert "managing and protecting data properly" in response.answer

    @pytest.mark.asyncio
    async def test_expert_personalization(self, composer, expert_context):
        response = await AssessmentHandler(composer).process(
            "What evidence is required for model validation?", expert_context
        )

        assert response.subcategory == "Model Validation"
        assert "(cross-validation, hold-out testing, bias assessment)" in response.answer

    @pytest.mark.asyncio
    async def test_step_failure_is_a_fault(self, composer):
        outcome = await ExplodingAssessmentHandler(composer).handle("anything at all")

        assert isinstance(outcome, Fault)
        assert outcome.step == "branches"
        assert isinstance(outcome.error, HandlerFaultException)
        assert outcome.error.handler == "assessment"

    @pytest.mark.asyncio
    async def test_process_turns_fault_into_error_answer(self, composer):
        response = await ExplodingAssessmentHandler(composer).process("anything at all")

        assert response.subcategory == "error"
        assert response.confidence == 0.1
        assert response.agent_used == "assessment"


class TestAnalyticsHandler:
    @pytest.mark.asyncio
    async def test_gap_analysis(self, composer):
        response = await AnalyticsHandler(composer).process("What are our biggest compliance gaps?")

        assert response.subcategory == "Gap Analysis"
        assert response.impact_level == ImpactLevel.HIGH

    @pytest.mark.asyncio
    async def test_trends(self, composer):
        response = await AnalyticsHandler(composer).process("How have we progressed over time?")

        assert response.subcategory == "Performance Trends"

    @pytest.mark.asyncio
    async def test_therapeutic_area_substitution(self, composer):
        response = await AnalyticsHandler(composer).process(
            "How do we compare to the industry benchmark?", SessionContext(therapeutic_area="oncology")
        )

        assert response.subcategory == "Benchmarking"
        assert "oncology organizations" in response.answer
        assert "your organization" not in response.answer.lower()


class TestGeneralComplianceHandler:
    @pytest.mark.asyncio
    async def test_capabilities_question(self, composer):
        response = await GeneralComplianceHandler(composer).process("What can AskRexi help me with?")

        assert response.subcategory == "General Support"
        assert response.category == ResponseCategory.COMPLIANCE

    @pytest.mark.asyncio
    async def test_getting_started(self, composer):
        response = await GeneralComplianceHandler(composer).process("How do I get started?")

        assert response.subcategory == "Implementation Guidance"

    @pytest.mark.asyncio
    async def test_out_of_scope_topic_is_declined(self, composer):
        response = await GeneralComplianceHandler(composer).process("Who won the football match last night?")

        assert response.subcategory == "out-of-scope"
        assert "can't help with sports questions" in response.answer
        assert response.category == ResponseCategory.GENERAL

    @pytest.mark.asyncio
    async def test_empty_question_gets_clarification(self, composer):
        response = await GeneralComplianceHandler(composer).process("")

        assert response.subcategory == "clarification"
        assert "compliance questions" in response.answer

    def test_compliance_vocabulary_keeps_question_in_scope(self):
        assert out_of_scope_topic("what is the weather for the fda inspection") is None
        assert out_of_scope_topic("") is None
        assert out_of_scope_topic("what's the weather like today") == "weather"

    @pytest.mark.asyncio
    async def test_team_competency_question_is_in_scope(self, composer):
        question = "How do I build a competency training programme for my team?"

        response = await GeneralComplianceHandler(composer).process(question)

        assert out_of_scope_topic(normalize_question(question)) is None
        assert response.subcategory == "Training & Competency"

    @pytest.mark.parametrize("question", [
        "What policies should our team adopt?",
        "Which framework should the team follow?",
        "What are the best practices for a team audit?",
    ])
    def test_general_domain_keywords_keep_question_in_scope(self, question):
        assert out_of_scope_topic(normalize_question(question)) is None


class TestReferenceRecordSteps:
    """Regulatory intelligence and the question bank answer after curated lookup."""

    @staticmethod
    def regulatory_handler(composer, updates, **kwargs):
        intelligence = RegulatoryIntelligenceLookupService(InMemoryRegulatoryIntelligenceStore(updates))
        return RegulatoryHandler(composer, intelligence=intelligence, **kwargs)

    @pytest.mark.asyncio
    async def test_intelligence_answers_before_specialist(self, composer, regulatory_updates):
        handler = self.regulatory_handler(composer, regulatory_updates)

        response = await handler.process("What are the FDA guidelines for AI in drug development?")

        assert response.answer == (
            "Based on FDA regulatory intelligence: "
            "The FDA proposes lifecycle controls for machine learning models in devices."
        )
        assert response.subcategory == "AI/ML"
        assert response.category == ResponseCategory.REGULATORY
        assert response.impact_level == ImpactLevel.HIGH
        assert response.sub_agent_used is None
        assert response.confidence == 0.9
        assert [source.title for source in response.sources] == [
            "FDA draft guidance on AI-enabled device software",
            "EMA reflection paper adopted",
            "WHO guidance on ethics of AI for health",
        ]
        assert response.sources[0].url == FDA_AI_ML_URL
        assert response.sources[2].url == "https://www.who.int/publications/i/item/9789240029200"
        assert response.action_items == (
            "Review compliance requirements within 30 days",
            "Update existing procedures",
            "Document compliance evidence",
            "Train relevant staff on requirements",
        )

    @pytest.mark.asyncio
    async def test_critical_update_action_items(self, composer, regulatory_updates):
        handler = self.regulatory_handler(composer, regulatory_updates)

        response = await handler.process("What has the EMA published recently?")

        assert response.impact_level == ImpactLevel.CRITICAL
        assert response.action_items[:2] == (
            "Implement immediate compliance measures",
            "Conduct urgent risk assessment",
        )

    @pytest.mark.asyncio
    async def test_curated_entry_wins_over_intelligence(self, composer, knowledge_entries, regulatory_updates):
        lookup = KnowledgeLookupService(InMemoryKnowledgeStore(knowledge_entries))
        handler = self.regulatory_handler(composer, regulatory_updates, lookup=lookup)

        response = await handler.process("What is the FDA AI/ML Action Plan?")

        assert response.answer.startswith("Curated:")

    @pytest.mark.asyncio
    async def test_empty_intelligence_falls_through_to_specialist(self, composer):
        handler = self.regulatory_handler(composer, [])

        response = await handler.process("What are the FDA guidelines for AI in drug development?")

        assert response.sub_agent_used == "fda"

    @pytest.mark.asyncio
    async def test_question_bank_answer(self, composer, assessment_questions):
        bank = AssessmentQuestionLookupService(InMemoryAssessmentQuestionStore(assessment_questions))
        handler = AssessmentHandler(composer, question_bank=bank)

        response = await handler.process("What evidence is required for model validation?")

        assert response.answer == (
            "Assessment Support: Validation must use data independent of training. "
            "Define acceptance criteria. Run the hold-out evaluation"
        )
        assert response.subcategory == "Model Validation"
        assert response.category == ResponseCategory.ASSESSMENT
        assert response.impact_level == ImpactLevel.CRITICAL
        assert response.confidence == 0.85
        assert response.sources[0].url == "/assessment?section=mv&question=aq-1"
        assert response.sources[0].title.startswith("Model Validation - Describe the model validation")
        assert response.action_items == (
            "Gather required evidence: Validation report, Test dataset lineage",
            "Engage responsible roles: Data Scientist, QA Lead",
            "CRITICAL: This is a production blocker - immediate action required",
            "Complete assessment documentation",
            "Validate compliance evidence",
            "Submit for review and approval",
        )

    @pytest.mark.asyncio
    async def test_question_without_guidance_uses_default_steps(self, composer):
        bank = AssessmentQuestionLookupService(InMemoryAssessmentQuestionStore([
            AssessmentQuestion(question_text="Is there an SOP for data governance reviews?", category="Data Governance"),
        ]))
        handler = AssessmentHandler(composer, question_bank=bank)

        response = await handler.process("Do we need an SOP?")

        assert response.answer == (
            "Assessment Support: Is there an SOP for data governance reviews? "
            "Please provide specific evidence and documentation as required."
        )
        assert response.impact_level == ImpactLevel.MEDIUM
        assert response.action_items == (
            "Complete assessment documentation",
            "Validate compliance evidence",
            "Submit for review and approval",
        )

    @pytest.mark.asyncio
    async def test_unavailable_question_bank_falls_through(self, composer):
        bank = AssessmentQuestionLookupService(UnavailableQuestionStore())
        handler = AssessmentHandler(composer, question_bank=bank)

        response = await handler.process("What evidence is required for model validation?")

        assert response.subcategory == "Model Validation"
        assert response.confidence == 0.7
