"""
Tests for the agents domain layer: envelope invariants, routing table and
domain selection, confidence, response composition and personalization.
"""

import pytest
from pydantic import ValidationError

from askrexi.agents.domain import (
    AgentResponse, ConfidenceCalculator, DomainKeywords, DomainSelector,
    PriorityRule, RoutingReason, RoutingTable, SessionContext, Source,
    TopicBranch, UserPreferences, first_firing
)
from askrexi.agents.domain.composer import FDA_AI_ML_URL, FDA_GMLP_URL, EMA_AI_REFLECTION_URL
from askrexi.agents.domain.personalization import BEGINNER_SIMPLIFICATIONS
from askrexi.config import ExpertiseLevel, ImpactLevel, MatchRule, ResponseCategory, SourceType
from askrexi.knowledge.domain import normalize_question


def select(question: str, table: RoutingTable = None):
    return DomainSelector(table or RoutingTable()).select(normalize_question(question))


class TestAgentResponse:
    """Envelope invariants."""

    def _response(self, **overrides) -> AgentResponse:
        fields = dict(
            answer="An answer",
            category=ResponseCategory.REGULATORY,
            subcategory="test",
            sources=(),
            action_items=(),
            impact_level=ImpactLevel.MEDIUM,
            related_questions=(),
            confidence=0.5,
            agent_used="regulatory",
        )
        fields.update(overrides)
        return AgentResponse(**fields)

    def test_rejects_blank_answer(self):
        with pytest.raises(ValueError):
            self._response(answer="   ")

    def test_rejects_confidence_out_of_range(self):
        with pytest.raises(ValueError):
            self._response(confidence=1.2)

    def test_rejects_unknown_impact(self):
        with pytest.raises(ValueError):
            self._response(impact_level="urgent")

    def test_with_confidence_marks_producer(self):
        response = self._response().with_confidence(0.5, agent_used="general-fallback")

        assert response.confidence == 0.5
        assert response.agent_used == "general-fallback"

    def test_to_dict_uses_lists(self):
        data = self._response(action_items=("Do it",)).to_dict()

        assert data["action_items"] == ["Do it"]
        assert data["sub_agent_used"] is None


class TestRoutingTable:
    """Validation of routing configuration."""

    def test_defaults_declare_four_domains(self):
        table = RoutingTable()

        assert table.domain_names == ("regulatory", "assessment", "analytics", "general")
        assert table.default_domain == "general"

    def test_terms_are_normalized(self):
        rule = PriorityRule(domain="regulatory", terms=("  FDA  ", "Food  and Drug Administration"))

        assert rule.terms == ("fda", "food and drug administration")

    def test_undeclared_default_is_rejected(self):
        with pytest.raises(ValidationError):
            RoutingTable(
                domains=(DomainKeywords(domain="regulatory", keywords=("fda",)),),
                priority_rules=(),
                default_domain="general",
            )

    def test_priority_rule_to_undeclared_domain_is_rejected(self):
        with pytest.raises(ValidationError):
            RoutingTable(
                domains=(DomainKeywords(domain="general", keywords=("help",)),),
                priority_rules=(PriorityRule(domain="regulatory", terms=("fda",)),),
            )

    def test_duplicate_domains_are_rejected(self):
        with pytest.raises(ValidationError):
            RoutingTable(
                domains=(
                    DomainKeywords(domain="general", keywords=("help",)),
                    DomainKeywords(domain="general", keywords=("support",)),
                ),
                priority_rules=(),
            )


class TestDomainSelector:
    """Priority overrides, keyword scoring, ties and the default domain."""

    def test_priority_term_overrides_keyword_scores(self):
        decision = select("Does the FDA require data governance evidence for model validation?")

        assert decision.domain == "regulatory"
        assert decision.reason == RoutingReason.PRIORITY
        assert decision.matched_term == "fda"

    def test_priority_rules_checked_in_order(self):
        decision = select("Is missing data governance a production blocker?")

        assert decision.domain == "assessment"
        assert decision.matched_term == "production blocker"

    def test_keyword_scoring(self):
        decision = select("How do we improve data governance evidence?")

        assert decision.domain == "assessment"
        assert decision.reason == RoutingReason.KEYWORDS
        assert decision.scores["assessment"] == 3

    def test_tie_goes_to_first_declared_domain(self):
        decision = select("compliance")

        assert decision.scores["regulatory"] == decision.scores["general"] == 1
        assert decision.domain == "regulatory"

    def test_abbreviation_inside_word_is_not_a_priority_hit(self):
        decision = select("Which dashboard shows our trend?")

        assert decision.domain == "analytics"
        assert decision.reason == RoutingReason.KEYWORDS

    def test_no_keywords_goes_to_default(self):
        decision = select("tell me a joke")

        assert decision.domain == "general"
        assert decision.reason == RoutingReason.DEFAULT

    def test_empty_question_goes_to_default(self):
        assert select("").domain == "general"

    def test_reasons_are_plain_strings(self):
        assert not issubclass(RoutingReason, str)
        assert (RoutingReason.PRIORITY, RoutingReason.KEYWORDS, RoutingReason.DEFAULT) == (
            "priority", "keywords", "default"
        )
        assert type(select("tell me a joke").reason) is str

    def test_same_question_same_decision(self):
        assert select("What is our compliance score?") == select("What is our compliance score?")


class TestConfidenceCalculator:
    def test_full_marks_are_capped(self, composer):
        response = composer.compose(
            domain="regulatory",
            category=ResponseCategory.REGULATORY,
            subcategory="x",
            answer="a",
            sources=(Source(type=SourceType.REGULATION, title="t", content="c"),),
            action_items=("do",),
            impact_level=ImpactLevel.CRITICAL,
            confidence=0.95,
        )

        assert ConfidenceCalculator.calculate(response) == 1.0

    def test_general_low_impact_without_extras_is_base(self, composer):
        response = composer.clarification("general", "compliance")

        assert ConfidenceCalculator.calculate(response) == 0.5

    def test_medium_impact_with_sources_and_actions(self, composer):
        response = composer.compose(
            domain="analytics",
            category=ResponseCategory.ANALYTICS,
            subcategory="x",
            answer="a",
            sources=(Source(type=SourceType.ANALYTICS, title="t", content="c"),),
            action_items=("do",),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.7,
        )

        assert ConfidenceCalculator.calculate(response) == 0.9

    def test_only_actions(self, composer):
        response = composer.compose(
            domain="general",
            category=ResponseCategory.GENERAL,
            subcategory="x",
            answer="a",
            action_items=("do",),
            impact_level=ImpactLevel.LOW,
            confidence=0.9,
        )

        assert ConfidenceCalculator.calculate(response) == 0.6


class TestTopicBranch:
    def test_any_rule(self):
        branch = TopicBranch(id="b", triggers=("gdpr", "data protection"), subcategory="s", answer="a")

        assert branch.fires("what about data protection") is True
        assert branch.fires("what about consent") is False

    def test_all_rule_and_requires(self):
        branch = TopicBranch(
            id="b", triggers=("data", "quality"), subcategory="s", answer="a",
            rule=MatchRule.ALL, requires=("what",),
        )

        assert branch.fires("what is data quality") is True
        assert branch.fires("is data quality important") is False
        assert branch.fires("what is data") is False

    def test_first_firing_respects_order(self):
        first = TopicBranch(id="first", triggers=("gcp",), subcategory="s", answer="a")
        second = TopicBranch(id="second", triggers=("gcp",), subcategory="s", answer="b")

        assert first_firing((first, second), "gcp").id == "first"
        assert first_firing((first, second), "nothing here") is None

    def test_requires_triggers(self):
        with pytest.raises(ValueError):
            TopicBranch(id="b", triggers=(), subcategory="s", answer="a")


class TestResponseComposer:
    """Sources, curated entries, clarifying and error answers."""

    def test_sources_from_labels(self, composer):
        sources = composer.sources_from_labels(
            ["FDA AI/ML Action Plan", "GMLP Guidelines", "EMA opinion", "Assessment Question Bank", "Internal SOP", " "],
            "regulatory",
        )

        assert [(s.type, s.url) for s in sources] == [
            (SourceType.REGULATION, FDA_AI_ML_URL),
            (SourceType.GUIDANCE, FDA_GMLP_URL),
            (SourceType.REGULATION, EMA_AI_REFLECTION_URL),
            (SourceType.ASSESSMENT, "/regulatory-guidance"),
            (SourceType.COMPLIANCE, "/regulatory-guidance"),
        ]
        assert sources[0].content == "Information from FDA AI/ML Action Plan"

    def test_from_entry_is_verbatim_with_fixed_confidence(self, composer, action_plan_entry):
        response = composer.from_entry(action_plan_entry, "regulatory")

        assert response.answer == action_plan_entry.answer
        assert response.subcategory == "FDA Guidance"
        assert response.confidence == 0.9
        assert response.agent_used == "regulatory"
        assert response.sub_agent_used is None
        assert response.action_items == action_plan_entry.action_items
        assert "How do EMA regulations affect our therapeutic area?" in response.related_questions

    def test_clarification(self, composer):
        response = composer.clarification("analytics", "analytics")

        assert response.category == ResponseCategory.GENERAL
        assert response.subcategory == "clarification"
        assert response.confidence == 0.3
        assert response.sources == ()
        assert response.action_items == ()
        assert "analytics questions" in response.answer

    def test_error_response(self, composer):
        response = composer.error_response("assessment", "assessment")

        assert response.subcategory == "error"
        assert response.confidence == 0.1
        assert response.answer

    def test_specialist_related_questions(self, composer):
        branch = TopicBranch(id="b", triggers=("gcp",), subcategory="s", answer="a")

        response = composer.from_branch(branch, "regulatory", ResponseCategory.REGULATORY, sub_agent="ich")

        assert response.sub_agent_used == "ich"
        assert "What is ICH E6(R3) Good Clinical Practice?" in response.related_questions


class TestPersonalizer:
    """Expertise and therapeutic-area substitutions."""

    def test_beginner_simplification(self, personalizer):
        text = personalizer.simplify("Regulatory compliance for pharmaceutical AI")

        assert text == "following rules and regulations for drug and medicine AI"

    def test_beginner_simplification_is_idempotent(self, personalizer, beginner_context):
        text = " and ".join(phrase.title() for phrase, _ in BEGINNER_SIMPLIFICATIONS) + " for pharmaceutical AI."

        once = personalizer.simplify(text)
        twice = personalizer.simplify(once)

        assert twice == once
        for phrase, replacement in BEGINNER_SIMPLIFICATIONS:
            assert phrase not in once.lower()
            assert replacement in once
        assert personalizer.personalize(once, beginner_context) == once

    def test_expert_expansion_is_idempotent(self, personalizer):
        once = personalizer.elaborate("Follow FDA guidelines and check data quality.")
        twice = personalizer.elaborate(once)

        assert once == (
            "Follow FDA guidelines (21 CFR Part 11, ICH E6(R3)) and check "
            "data quality (completeness, accuracy, consistency, validity)."
        )
        assert twice == once

    def test_therapeutic_area(self, personalizer):
        text = personalizer.localize("Your organization should review your therapeutic area.", "oncology")

        assert text == "oncology organizations should review oncology."

    def test_no_context_leaves_text(self, personalizer):
        assert personalizer.personalize("Regulatory compliance", None) == "Regulatory compliance"

    def test_intermediate_leaves_text(self, personalizer):
        context = SessionContext(preferences=UserPreferences(expertise_level=ExpertiseLevel.INTERMEDIATE))

        assert personalizer.personalize("Regulatory compliance", context) == "Regulatory compliance"

    def test_beginner_and_area_together(self, personalizer):
        context = SessionContext(
            therapeutic_area="cardiology",
            preferences=UserPreferences(expertise_level=ExpertiseLevel.BEGINNER),
        )

        text = personalizer.personalize("Data governance matters for your organization.", context)

        assert text == "managing and protecting data properly matters for cardiology organizations."
