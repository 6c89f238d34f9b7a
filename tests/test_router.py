"""
Tests for the Router: end-to-end routing, final confidence, fault
fallback, usage analytics and concurrency.
"""

import asyncio

import pytest

from askrexi.agents.application import build_router
from askrexi.agents.domain import DomainKeywords, RoutingTable, SessionContext, UserPreferences
from askrexi.config import ExpertiseLevel
from askrexi.core import ConfigurationException
from askrexi.knowledge.infrastructure import (
    InMemoryAssessmentQuestionStore, InMemoryKnowledgeStore, InMemoryRegulatoryIntelligenceStore
)

FDA_QUESTION = "What are the FDA guidelines for AI in drug development?"


class TestRouting:
    """Question in, fully scored answer out."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question", [
        FDA_QUESTION,
        "What are the latest FDA guidelines for AI in healthcare?",
    ])
    async def test_fda_guidelines_question(self, router, question):
        response = await router.route(question)

        assert response.agent_used == "regulatory"
        assert response.sub_agent_used == "fda"
        assert response.subcategory == "FDA AI/ML Action Plan"
        assert response.confidence == 1.0
        assert response.sources
        assert response.action_items

    @pytest.mark.asyncio
    async def test_capabilities_question(self, router):
        response = await router.route("What can AskRexi help me with?")

        assert response.agent_used == "general"
        assert response.subcategory == "General Support"
        assert response.confidence == 0.9

    @pytest.mark.asyncio
    async def test_analytics_priority_term(self, router):
        response = await router.route("What is our current compliance score?")

        assert response.agent_used == "analytics"
        assert response.subcategory == "Performance Metrics"
        assert response.confidence == 0.9

    @pytest.mark.asyncio
    async def test_assessment_keywords(self, router):
        response = await router.route("What evidence is required for model validation?")

        assert response.agent_used == "assessment"
        assert response.subcategory == "Model Validation"
        assert response.confidence == 1.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question", ["", None, "   ", "xyzzy plugh"])
    async def test_unroutable_question_gets_clarification(self, router, question):
        response = await router.route(question)

        assert response.agent_used == "general"
        assert response.subcategory == "clarification"
        assert response.answer
        assert response.confidence == 0.5

    @pytest.mark.asyncio
    async def test_out_of_scope_question(self, router):
        response = await router.route("What's the weather like today?")

        assert response.agent_used == "general"
        assert response.subcategory == "out-of-scope"
        assert response.confidence == 0.6

    @pytest.mark.asyncio
    async def test_curated_entry_is_final_scored(self, curated_router):
        response = await curated_router.route("What is the FDA AI/ML Action Plan?")

        assert response.answer.startswith("Curated:")
        assert response.sub_agent_used is None
        assert response.confidence == 1.0

    @pytest.mark.asyncio
    async def test_curated_entry_other_domain(self, curated_router):
        response = await curated_router.route("What evidence does the data governance section need?")

        assert response.agent_used == "assessment"
        assert response.answer.startswith("Curated:")
        assert response.confidence == 0.9

    @pytest.mark.asyncio
    async def test_exact_curated_entry_survives_crowded_category(self, crowded_entries):
        crowded_router = build_router(store=InMemoryKnowledgeStore(crowded_entries), candidate_limit=25)

        response = await crowded_router.route("What validation evidence do auditors expect?")

        assert response.agent_used == "assessment"
        assert response.answer == "EXACT CURATED ANSWER"

    @pytest.mark.asyncio
    async def test_team_competency_question_is_answered(self, router):
        response = await router.route("How do I build a competency training programme for my team?")

        assert response.agent_used == "general"
        assert response.subcategory == "Training & Competency"

    @pytest.mark.asyncio
    async def test_reference_records_are_final_scored(self, regulatory_updates, assessment_questions):
        records_router = build_router(
            intelligence_store=InMemoryRegulatoryIntelligenceStore(regulatory_updates),
            question_store=InMemoryAssessmentQuestionStore(assessment_questions),
        )

        regulatory = await records_router.route(FDA_QUESTION)
        assessment = await records_router.route("What evidence is required for model validation?")

        assert regulatory.answer.startswith("Based on FDA regulatory intelligence")
        assert regulatory.confidence == 1.0
        assert assessment.answer.startswith("Assessment Support:")
        assert assessment.confidence == 1.0

    @pytest.mark.asyncio
    async def test_reference_record_limits(self, regulatory_updates):
        records_router = build_router(
            intelligence_store=InMemoryRegulatoryIntelligenceStore(regulatory_updates),
            regulatory_update_limit=1,
        )

        response = await records_router.route(FDA_QUESTION)

        assert len(response.sources) == 1

    @pytest.mark.asyncio
    async def test_context_personalizes_answer(self, router):
        context = SessionContext(
            therapeutic_area="oncology",
            preferences=UserPreferences(expertise_level=ExpertiseLevel.BEGINNER),
        )

        response = await router.route("How do I complete the data governance assessment?", context)

        assert "managing and protecting data properly" in response.answer

    def test_select_domain(self, router):
        decision = router.select_domain("Is the EMA reflection paper binding?")

        assert decision.domain == "regulatory"
        assert decision.matched_term == "ema"


class TestDeterminism:
    @pytest.mark.asyncio
    async def test_same_question_same_answer(self, router):
        first = await router.route(FDA_QUESTION)
        second = await router.route(FDA_QUESTION)

        assert first == second

    @pytest.mark.asyncio
    async def test_concurrent_requests_do_not_interfere(self, router):
        questions = [
            FDA_QUESTION,
            "What is our current compliance score?",
            "What evidence is required for model validation?",
            "What can AskRexi help me with?",
        ] * 5

        sequential = [await router.route(q) for q in questions]
        concurrent = await asyncio.gather(*(router.route(q) for q in questions))

        assert list(concurrent) == sequential


class TestFallback:
    """Faults reroute to the default domain at fixed confidence."""

    @pytest.mark.asyncio
    async def test_step_fault_reroutes_to_default(self, router, monkeypatch):
        regulatory = router.handlers[0]

        async def boom(question, normalized):
            raise RuntimeError("specialist crashed")

        monkeypatch.setattr(regulatory, "_delegate", boom)

        response = await router.route(FDA_QUESTION)

        assert response.agent_used == "general-fallback"
        assert response.confidence == 0.5
        assert response.answer

    @pytest.mark.asyncio
    async def test_exception_escaping_handler_reroutes(self, router, monkeypatch):
        regulatory = router.handlers[0]

        async def broken_handle(question, context=None):
            raise KeyError("missing")

        monkeypatch.setattr(regulatory, "handle", broken_handle)

        response = await router.route(FDA_QUESTION)

        assert response.agent_used == "general-fallback"
        assert response.confidence == 0.5

    @pytest.mark.asyncio
    async def test_default_domain_fault_still_answers(self, router, monkeypatch):
        general = router.handlers[-1]

        async def boom(question, normalized):
            raise RuntimeError("branches crashed")

        monkeypatch.setattr(general, "_match_branches", boom)

        response = await router.route("How do I get started?")

        assert response.agent_used == "general-fallback"
        assert response.subcategory == "error"
        assert response.confidence == 0.5

    @pytest.mark.asyncio
    async def test_fallback_handler_raising_uses_static_error(self, router, monkeypatch):
        regulatory, general = router.handlers[0], router.handlers[-1]

        async def broken(question, context=None):
            raise RuntimeError("down")

        monkeypatch.setattr(regulatory, "handle", broken)
        monkeypatch.setattr(general, "process", broken)

        response = await router.route(FDA_QUESTION)

        assert response.agent_used == "general-fallback"
        assert response.subcategory == "error"
        assert response.confidence == 0.5


class TestUsageAnalytics:
    """Usage records are a side effect that never fails a request."""

    @pytest.mark.asyncio
    async def test_record_per_question(self, router, usage):
        long_question = FDA_QUESTION + " " + "x" * 100

        await router.route(long_question)
        await router.drain()

        assert len(usage.records) == 1
        record = usage.records[0]
        assert record.domain == "regulatory"
        assert record.question_prefix == long_question[:50]
        assert record.elapsed_ms >= 0
        assert router.pending_usage == 0

    @pytest.mark.asyncio
    async def test_fallback_is_recorded_as_fallback(self, router, usage, monkeypatch):
        async def broken(question, context=None):
            raise RuntimeError("down")

        monkeypatch.setattr(router.handlers[0], "handle", broken)

        await router.route(FDA_QUESTION)
        await router.drain()

        assert usage.records[0].domain == "general-fallback"

    @pytest.mark.asyncio
    async def test_sink_failure_does_not_fail_request(self, failing_usage):
        failing_router = build_router(usage=failing_usage)

        response = await failing_router.route(FDA_QUESTION)
        await failing_router.drain()

        assert response.confidence == 1.0
        assert failing_usage.calls == 1

    @pytest.mark.asyncio
    async def test_without_sink(self):
        response = await build_router().route(FDA_QUESTION)

        assert response.agent_used == "regulatory"


class TestRouterConfiguration:
    def test_every_domain_needs_a_handler(self):
        table = RoutingTable(
            domains=(
                DomainKeywords(domain="legal", keywords=("contract",)),
                DomainKeywords(domain="general", keywords=("help",)),
            ),
            priority_rules=(),
        )

        with pytest.raises(ConfigurationException):
            build_router(table=table)

    def test_subset_table(self):
        table = RoutingTable(
            domains=(
                DomainKeywords(domain="analytics", keywords=("score",)),
                DomainKeywords(domain="general", keywords=("help",)),
            ),
            priority_rules=(),
        )

        router = build_router(table=table)

        assert [handler.name for handler in router.handlers] == ["analytics", "general"]
        assert router.select_domain("fda guidance").domain == "general"
