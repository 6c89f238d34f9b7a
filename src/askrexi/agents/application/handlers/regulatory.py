"""
Regulatory Handler
==================

FDA, EMA, ICH and other regulatory guidance. The only domain with topic
specialists, and the only one that reads regulatory intelligence records:
recent updates from a mentioned authority, or carrying the question's
topic terms, answer ahead of the specialists.
"""

from typing import List, Optional, Tuple

from askrexi.config import DomainName, ImpactLevel, ResponseCategory, SourceType
from askrexi.agents.application.handlers.base import DomainHandler, Step
from askrexi.agents.application.specialists import (
    EMASpecialist, FDASpecialist, GeneralRegulatorySpecialist, ICHSpecialist
)
from askrexi.agents.domain import (
    DomainCapability, Matched, NoMatch, Personalizer, ResponseComposer, Source,
    StepOutcome, TopicBranch
)
from askrexi.agents.domain.composer import FDA_AI_ML_URL
from askrexi.knowledge.application import KnowledgeLookupService, RegulatoryIntelligenceLookupService
from askrexi.knowledge.domain import KnowledgeMatcher

CLINICAL_TRIAL_TERMS = (
    "clinical trial", "clinical study", "gcp", "good clinical practice",
    "protocol", "patient recruitment", "informed consent", "irb", "iec",
    "adverse event", "serious adverse event", "data monitoring committee",
)

AI_ML_TERMS = (
    "ai", "artificial intelligence", "machine learning", "ml", "algorithm",
    "samd", "software as medical device", "gmlp", "ai/ml action plan",
    "clinical decision support", "predictive analytics",
)

DATA_PRIVACY_TERMS = (
    "gdpr", "data protection", "privacy", "personal data", "consent",
    "data subject rights", "data minimization", "purpose limitation",
    "data retention", "cross-border transfer",
)


class RegulatoryHandler(DomainHandler):
    name = DomainName.REGULATORY
    label = "regulatory"
    category = ResponseCategory.REGULATORY

    capability = DomainCapability(
        domain=DomainName.REGULATORY,
        subdomains=("FDA Guidelines", "EMA Requirements", "ICH Standards", "General Regulatory"),
        keywords=(
            "fda", "ema", "ich", "regulation", "guideline", "compliance", "regulatory",
            "approval", "submission", "clinical trial", "safety", "efficacy", "gcp",
            "gmp", "glp", "qms", "risk management", "pharmacovigilance", "samd",
            "ai/ml action plan", "gmlp", "eu ai act", "gdpr", "21 cfr part 11",
            "good clinical practice", "good manufacturing practice", "good laboratory practice",
            "quality management system", "adverse event", "drug safety", "regulatory pathway",
        ),
        expertise=(
            "FDA AI/ML Guidelines",
            "EMA Reflection Papers",
            "ICH Harmonization",
            "Regulatory Submissions",
            "Clinical Trial Regulations",
            "Drug Safety Requirements",
            "Quality Standards",
            "Compliance Frameworks",
        ),
    )

    specialist_types = (FDASpecialist, EMASpecialist, ICHSpecialist, GeneralRegulatorySpecialist)

    # Topic questions without an authority name
    topic_routes = (
        (CLINICAL_TRIAL_TERMS, "ich"),
        (AI_ML_TERMS, "fda"),
        (DATA_PRIVACY_TERMS, "ema"),
    )

    branches = (
        TopicBranch(
            id="regulatory-ai-ml",
            triggers=AI_ML_TERMS,
            subcategory="AI/ML Compliance",
            answer=(
                "For AI/ML regulatory compliance, key requirements include: FDA's Software as a Medical "
                "Device (SaMD) guidance, Good Machine Learning Practice (GMLP) principles, and EU AI Act "
                "compliance. These regulations require comprehensive validation, risk management, and "
                "post-market surveillance."
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="FDA AI/ML Software as Medical Device Guidance",
                    content="Comprehensive guidance for AI/ML medical device development and validation",
                    url=FDA_AI_ML_URL,
                ),
                Source(
                    type=SourceType.REGULATION,
                    title="EU AI Act Requirements",
                    content="Risk-based approach to AI system regulation in the European Union",
                    url="https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:52021PC0206",
                ),
            ),
            action_items=(
                "Conduct AI system risk assessment",
                "Implement validation protocols",
                "Establish post-market monitoring",
                "Document compliance evidence",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.7,
        ),
        TopicBranch(
            id="regulatory-clinical-trials",
            triggers=CLINICAL_TRIAL_TERMS,
            subcategory="Clinical Trials",
            answer=(
                "Clinical trial regulations require adherence to Good Clinical Practice (GCP) guidelines, "
                "including ICH E6(R3) for AI integration. Key requirements include protocol development, "
                "informed consent, data integrity, and safety reporting."
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="ICH E6(R3) Good Clinical Practice",
                    content="Updated GCP guidelines addressing AI integration in clinical trials",
                    url="https://www.ich.org/page/e6-good-clinical-practice",
                ),
            ),
            action_items=(
                "Develop compliant clinical protocols",
                "Implement data integrity measures",
                "Establish safety monitoring",
                "Train clinical staff on GCP requirements",
            ),
            impact_level=ImpactLevel.CRITICAL,
            confidence=0.7,
        ),
        TopicBranch(
            id="regulatory-requirements",
            triggers=("requirement", "need"),
            subcategory="requirements",
            answer=(
                "For regulatory requirements, I can help you with specific guidance from FDA, EMA, ICH, "
                "and other regulatory bodies. Please specify which regulatory authority or area you're "
                "interested in."
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="Regulatory Requirements Database",
                    content="Comprehensive database of regulatory requirements",
                    url="/regulatory/requirements",
                ),
            ),
            action_items=(
                "Specify the regulatory authority (FDA, EMA, ICH)",
                "Clarify the specific area of interest",
                "Provide context about your product or process",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.6,
        ),
        TopicBranch(
            id="regulatory-compliance",
            triggers=("compliance", "compliant"),
            subcategory="compliance",
            answer=(
                "Regulatory compliance involves adhering to guidelines from multiple authorities. I can "
                "help you understand specific compliance requirements for FDA, EMA, ICH, and other "
                "regulatory bodies."
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="Compliance Framework",
                    content="Comprehensive compliance guidance",
                    url="/regulatory/compliance",
                ),
            ),
            action_items=(
                "Identify applicable regulatory authorities",
                "Review specific compliance requirements",
                "Develop compliance implementation plan",
                "Establish monitoring and reporting processes",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.7,
        ),
    )

    def __init__(
        self,
        composer: ResponseComposer,
        lookup: Optional[KnowledgeLookupService] = None,
        matcher: Optional[KnowledgeMatcher] = None,
        personalizer: Optional[Personalizer] = None,
        intelligence: Optional[RegulatoryIntelligenceLookupService] = None,
    ):
        super().__init__(composer, lookup=lookup, matcher=matcher, personalizer=personalizer)
        self._intelligence = intelligence

    def pipeline(self) -> List[Tuple[str, Step]]:
        steps = super().pipeline()
        steps.insert(1, ("records", self._lookup_intelligence))
        return steps

    async def _lookup_intelligence(self, question: str, normalized: str) -> StepOutcome:
        if self._intelligence is None:
            return NoMatch(step="records")

        updates = await self._intelligence.updates(question)
        if not updates:
            return NoMatch(step="records")
        return Matched(self._composer.from_regulatory_updates(updates, self.name))
