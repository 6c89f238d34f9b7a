"""
Response Composer
=================

Builds AgentResponse envelopes for every handler.

Related questions come from a fixed list per domain or specialist, never
from the matched content. Citation labels are turned into sources by fixed
substring rules and a fixed URL table. Confidence set here is provisional;
the Router computes the final value.
"""

from typing import Dict, Iterable, Optional, Sequence, Tuple

from askrexi.config import DomainName, ImpactLevel, ResponseCategory, SourceType
from askrexi.agents.domain.entities import AgentResponse, Source
from askrexi.agents.domain.value_objects import TopicBranch
from askrexi.knowledge.domain import AssessmentQuestion, KnowledgeEntry, RegulatoryUpdate, contains_any

CURATED_CONFIDENCE = 0.9
REGULATORY_INTELLIGENCE_CONFIDENCE = 0.9
ASSESSMENT_RECORD_CONFIDENCE = 0.85
CLARIFICATION_CONFIDENCE = 0.3
ERROR_CONFIDENCE = 0.1

FDA_AI_ML_URL = (
    "https://www.fda.gov/medical-devices/software-medical-device-samd/"
    "artificial-intelligence-and-machine-learning-software-medical-device"
)
FDA_GMLP_URL = (
    "https://www.fda.gov/medical-devices/software-medical-device-samd/"
    "good-machine-learning-practice-medical-device-development"
)
EMA_AI_REFLECTION_URL = (
    "https://www.ema.europa.eu/en/documents/report/"
    "reflection-paper-artificial-intelligence-use-medicinal-products-human-medicine_en.pdf"
)
ICH_E6_URL = "https://www.ich.org/page/e6-r3-gcp"

# Ordered (terms, source type); first hit wins, compliance otherwise
SOURCE_TYPE_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("fda", "ema", "ich"), SourceType.REGULATION),
    (("guideline", "guidance"), SourceType.GUIDANCE),
    (("analytics", "dashboard"), SourceType.ANALYTICS),
    (("assessment", "question"), SourceType.ASSESSMENT),
)

# Known citation names, lowercased
CITATION_URLS: Dict[str, str] = {
    "fda ai/ml action plan": FDA_AI_ML_URL,
    "gmlp guidelines": FDA_GMLP_URL,
    "good machine learning practice": FDA_GMLP_URL,
    "samd framework": "https://www.fda.gov/medical-devices/software-medical-device-samd",
    "21 cfr part 11": "https://www.accessdata.fda.gov/scripts/cdrh/cfdocs/cfcfr/CFRSearch.cfm?CFRPart=11",
    "ema ai reflection paper": EMA_AI_REFLECTION_URL,
    "eu ai act": "https://digital-strategy.ec.europa.eu/en/policies/regulatory-framework-ai",
    "gdpr": "https://gdpr.eu/",
    "ich e6(r3)": ICH_E6_URL,
    "ich e6(r3) good clinical practice": ICH_E6_URL,
    "ich e8(r1)": "https://www.ich.org/page/e8-r1-general-considerations-clinical-studies",
    "ich e9(r1)": "https://www.ich.org/page/e9-r1-statistical-principles-clinical-trials",
    "ich e17": "https://www.ich.org/page/e17-multi-regional-clinical-trials",
}

# Authority fallbacks for labels not in the table
AUTHORITY_URLS: Tuple[Tuple[str, str], ...] = (
    ("fda", FDA_AI_ML_URL),
    ("ema", EMA_AI_REFLECTION_URL),
    ("ich", ICH_E6_URL),
)

# Regulatory intelligence links by publishing authority
AUTHORITY_HOME_URLS: Dict[str, str] = {
    "FDA": FDA_AI_ML_URL,
    "EMA": EMA_AI_REFLECTION_URL,
    "ICH": "https://www.ich.org/page/quality-guidelines",
    "WHO": "https://www.who.int/publications/i/item/9789240029200",
}
DEFAULT_AUTHORITY_URL = "https://www.fda.gov/"

# Ordered (content terms, subcategory) for regulatory intelligence answers
UPDATE_SUBCATEGORIES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("ai", "machine learning"), "AI/ML"),
    (("clinical trial", "gcp"), "Clinical Trials"),
    (("privacy", "gdpr"), "Data Privacy"),
    (("quality", "validation"), "Quality Assurance"),
)

UPDATE_ACTION_ITEMS: Dict[str, Tuple[str, ...]] = {
    ImpactLevel.CRITICAL: ("Implement immediate compliance measures", "Conduct urgent risk assessment"),
    ImpactLevel.HIGH: ("Review compliance requirements within 30 days", "Update existing procedures"),
}
ROUTINE_UPDATE_ACTION_ITEMS = ("Schedule compliance review", "Monitor regulatory updates")
UPDATE_FOLLOW_UPS = ("Document compliance evidence", "Train relevant staff on requirements")

ASSESSMENT_FOLLOW_UPS = (
    "Complete assessment documentation",
    "Validate compliance evidence",
    "Submit for review and approval",
)


def excerpt(text: str, length: int) -> str:
    """First `length` characters, marked with an ellipsis when cut."""
    text = text.strip()
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


RELATED_QUESTIONS: Dict[str, Tuple[str, ...]] = {
    DomainName.REGULATORY: (
        "What are the latest FDA guidelines for AI in healthcare?",
        "How do EMA regulations affect our therapeutic area?",
        "What are the ICH requirements for clinical trials?",
        "What is the impact of new GCP guidelines?",
        "How do I prepare for regulatory submissions?",
        "What are the key regulatory milestones for our product?",
        "How do I ensure compliance with international regulations?",
        "What are the consequences of regulatory non-compliance?",
    ),
    DomainName.ASSESSMENT: (
        "How do I complete the data governance assessment section?",
        "What evidence is required for model validation?",
        "How do I conduct AI risk assessment?",
        "What are the QA requirements for AI systems?",
        "How do I validate AI model performance?",
        "What are the production blocker requirements?",
        "How do I document compliance evidence?",
        "What training is required for AI compliance?",
    ),
    DomainName.ANALYTICS: (
        "What is our current compliance score?",
        "How are we performing compared to industry benchmarks?",
        "What are our performance trends over time?",
        "What are our biggest compliance gaps?",
        "How can we improve our compliance performance?",
        "What are the key performance indicators we should focus on?",
        "How do we measure compliance success?",
        "What are the ROI metrics for compliance investments?",
    ),
    DomainName.GENERAL: (
        "What can AskRexi help me with?",
        "How do I get started with compliance assessments?",
        "What are the key compliance principles?",
        "How do I implement compliance best practices?",
        "What training is available for compliance?",
        "How do I develop compliance competencies?",
        "What are the compliance fundamentals?",
        "How do I build a compliance framework?",
    ),
    "fda": (
        "What are the latest FDA guidelines for AI in healthcare?",
        "How does FDA regulate AI/ML software as medical devices?",
        "What is the FDA AI/ML Action Plan?",
        "What are Good Machine Learning Practice requirements?",
        "How do I submit AI software to FDA for approval?",
        "What are the FDA requirements for clinical decision support?",
        "How does 21 CFR Part 11 apply to AI systems?",
        "What are the FDA quality system requirements for AI?",
    ),
    "ema": (
        "What are the EMA requirements for AI in pharmaceutical development?",
        "How does GDPR affect AI systems in pharmaceutical companies?",
        "What is the EU AI Act and how does it impact pharma?",
        "What are the EMA guidelines for AI in clinical trials?",
        "How do I ensure GDPR compliance for AI data processing?",
        "What are the EMA requirements for algorithmic accountability?",
        "How does the EU AI Act classify AI systems?",
        "What are the EMA data governance requirements?",
    ),
    "ich": (
        "What are the ICH requirements for clinical trials?",
        "What is ICH E6(R3) Good Clinical Practice?",
        "How do ICH guidelines affect clinical study design?",
        "What are the ICH statistical principles for clinical trials?",
        "How do ICH guidelines ensure data integrity?",
        "What are the ICH requirements for multi-regional clinical trials?",
        "How do ICH guidelines address AI in clinical trials?",
        "What are the key changes in ICH E6(R3)?",
    ),
    "general-regulatory": (
        "What are the key international regulatory requirements?",
        "How do I develop a regulatory strategy?",
        "What are the latest regulatory trends?",
        "How do I ensure global regulatory compliance?",
        "What are the key regulatory milestones?",
        "How do I prepare for regulatory inspections?",
        "What are the consequences of regulatory non-compliance?",
        "How do I stay updated on regulatory changes?",
    ),
}


class ResponseComposer:
    """Pure builder of AgentResponse values."""

    def __init__(
        self,
        related_questions: Optional[Dict[str, Tuple[str, ...]]] = None,
        citation_urls: Optional[Dict[str, str]] = None,
    ):
        self._related = dict(RELATED_QUESTIONS if related_questions is None else related_questions)
        self._urls = {
            name.lower(): url
            for name, url in (CITATION_URLS if citation_urls is None else citation_urls).items()
        }

    # ========== Sources ==========

    @staticmethod
    def classify_source(label: str) -> str:
        text = label.lower()
        for terms, source_type in SOURCE_TYPE_RULES:
            if contains_any(text, terms):
                return source_type
        return SourceType.COMPLIANCE

    def source_url(self, label: str, domain: str) -> str:
        text = " ".join(label.lower().split())
        if text in self._urls:
            return self._urls[text]
        for authority, url in AUTHORITY_URLS:
            if contains_any(text, (authority,)):
                return url
        return f"/{domain}-guidance"

    def sources_from_labels(self, labels: Iterable[str], domain: str) -> Tuple[Source, ...]:
        return tuple(
            Source(
                type=self.classify_source(label),
                title=label,
                content=f"Information from {label}",
                url=self.source_url(label, domain),
            )
            for label in labels
            if label and label.strip()
        )

    def related_questions(self, key: str) -> Tuple[str, ...]:
        return self._related.get(key, self._related.get(DomainName.GENERAL, ()))

    # ========== Envelopes ==========

    def compose(
        self,
        *,
        domain: str,
        category: str,
        subcategory: str,
        answer: str,
        sources: Sequence[Source] = (),
        action_items: Sequence[str] = (),
        impact_level: str = ImpactLevel.MEDIUM,
        confidence: float,
        sub_agent: Optional[str] = None,
    ) -> AgentResponse:
        return AgentResponse(
            answer=answer,
            category=category,
            subcategory=subcategory,
            sources=tuple(sources),
            action_items=tuple(action_items),
            impact_level=impact_level,
            related_questions=self.related_questions(sub_agent or domain),
            confidence=confidence,
            agent_used=domain,
            sub_agent_used=sub_agent,
        )

    def from_entry(self, entry: KnowledgeEntry, domain: str) -> AgentResponse:
        """Curated entry answer, stored text verbatim."""
        return self.compose(
            domain=domain,
            category=entry.category,
            subcategory=entry.subcategory or "curated",
            answer=entry.answer,
            sources=self.sources_from_labels(entry.sources, domain),
            action_items=entry.action_items,
            impact_level=entry.impact_level,
            confidence=CURATED_CONFIDENCE,
        )

    def from_branch(
        self,
        branch: TopicBranch,
        domain: str,
        category: str,
        sub_agent: Optional[str] = None,
    ) -> AgentResponse:
        return self.compose(
            domain=domain,
            category=branch.category or category,
            subcategory=branch.subcategory,
            answer=branch.answer,
            sources=branch.sources,
            action_items=branch.action_items,
            impact_level=branch.impact_level,
            confidence=branch.confidence,
            sub_agent=sub_agent,
        )

    def clarification(self, domain: str, label: str) -> AgentResponse:
        """Generic low-confidence answer asking the user to narrow the question."""
        return self.compose(
            domain=domain,
            category=ResponseCategory.GENERAL,
            subcategory="clarification",
            answer=(
                f"I can help you with {label} questions. "
                "Could you be more specific about what you need to know?"
            ),
            impact_level=ImpactLevel.LOW,
            confidence=CLARIFICATION_CONFIDENCE,
        )

    def error_response(self, domain: str, label: str) -> AgentResponse:
        return self.compose(
            domain=domain,
            category=ResponseCategory.GENERAL,
            subcategory="error",
            answer=(
                f"I encountered an error processing your {label} question. "
                "Please try rephrasing or ask a different question."
            ),
            action_items=(
                "Try rephrasing your question",
                "Check if your question is related to compliance",
                "Contact support if the issue persists",
            ),
            impact_level=ImpactLevel.LOW,
            confidence=ERROR_CONFIDENCE,
        )

    # ========== Reference records ==========

    @staticmethod
    def update_subcategory(update: RegulatoryUpdate) -> str:
        for terms, subcategory in UPDATE_SUBCATEGORIES:
            if contains_any(update.content, terms):
                return subcategory
        return "General"

    @staticmethod
    def update_action_items(impact_level: str) -> Tuple[str, ...]:
        first = UPDATE_ACTION_ITEMS.get(impact_level, ROUTINE_UPDATE_ACTION_ITEMS)
        return first + UPDATE_FOLLOW_UPS

    def from_regulatory_updates(self, updates: Sequence[RegulatoryUpdate], domain: str) -> AgentResponse:
        """
        Answer built from regulatory intelligence, newest update first.

        The newest update supplies the answer, subcategory and impact; every
        update is cited.
        """
        latest = updates[0]
        return self.compose(
            domain=domain,
            category=ResponseCategory.REGULATORY,
            subcategory=self.update_subcategory(latest),
            answer=f"Based on {latest.source} regulatory intelligence: {excerpt(latest.content, 300)}",
            sources=tuple(
                Source(
                    type=SourceType.REGULATION,
                    title=update.title,
                    content=excerpt(update.content, 200),
                    url=AUTHORITY_HOME_URLS.get(update.source, DEFAULT_AUTHORITY_URL),
                )
                for update in updates
            ),
            action_items=self.update_action_items(latest.impact_level),
            impact_level=latest.impact_level,
            confidence=REGULATORY_INTELLIGENCE_CONFIDENCE,
        )

    @staticmethod
    def assessment_action_items(question: AssessmentQuestion) -> Tuple[str, ...]:
        items = []
        if question.evidence_required:
            items.append(f"Gather required evidence: {', '.join(question.evidence_required)}")
        if question.responsible_roles:
            items.append(f"Engage responsible roles: {', '.join(question.responsible_roles)}")
        if question.is_production_blocker:
            items.append("CRITICAL: This is a production blocker - immediate action required")
        return tuple(items) + ASSESSMENT_FOLLOW_UPS

    def from_assessment_questions(self, questions: Sequence[AssessmentQuestion], domain: str) -> AgentResponse:
        """Answer built from the question bank; the first question supplies the guidance."""
        primary = questions[0]
        summary = primary.guidance.strip() or primary.question_text.strip()
        if summary[-1] not in ".?!":
            summary += "."
        steps = (
            ". ".join(primary.action_steps)
            if primary.action_steps
            else "Please provide specific evidence and documentation as required."
        )
        return self.compose(
            domain=domain,
            category=ResponseCategory.ASSESSMENT,
            subcategory=primary.category or "General Assessment",
            answer=f"Assessment Support: {summary} {steps}",
            sources=tuple(
                Source(
                    type=SourceType.ASSESSMENT,
                    title=f"{q.section_title or 'Assessment'} - {excerpt(q.question_text, 50)}",
                    content=q.question_text,
                    url=f"/assessment?section={q.section_id or ''}&question={q.id or ''}",
                )
                for q in questions
            ),
            action_items=self.assessment_action_items(primary),
            impact_level=ImpactLevel.CRITICAL if primary.is_production_blocker else ImpactLevel.MEDIUM,
            confidence=ASSESSMENT_RECORD_CONFIDENCE,
        )
