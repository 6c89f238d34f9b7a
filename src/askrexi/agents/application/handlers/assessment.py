"""
Assessment Handler
==================

Guidance on completing compliance assessment sections. Approved questions
from the assessment question bank answer ahead of the built-in branches.
"""

from typing import List, Optional, Tuple

from askrexi.config import DomainName, ImpactLevel, ResponseCategory, SourceType
from askrexi.agents.application.handlers.base import DomainHandler, Step
from askrexi.agents.domain import (
    DomainCapability, Matched, NoMatch, Personalizer, ResponseComposer, Source,
    StepOutcome, TopicBranch
)
from askrexi.knowledge.application import AssessmentQuestionLookupService, KnowledgeLookupService
from askrexi.knowledge.domain import KnowledgeMatcher


class AssessmentHandler(DomainHandler):
    name = DomainName.ASSESSMENT
    label = "assessment"
    category = ResponseCategory.ASSESSMENT

    capability = DomainCapability(
        domain=DomainName.ASSESSMENT,
        subdomains=(
            "Data Governance", "Model Validation", "Risk Management",
            "Quality Assurance", "Training & Competency",
        ),
        keywords=(
            "assessment", "question", "section", "requirement", "evidence", "documentation",
            "validation", "verification", "testing", "protocol", "sop", "checklist",
            "audit", "inspection", "governance", "data governance", "model validation",
            "quality assurance", "risk assessment", "production blocker", "compliance",
            "evidence required", "responsible roles", "validation criteria", "guidance",
            "best practice", "implementation", "training", "competency", "certification",
        ),
        expertise=(
            "Assessment Question Guidance",
            "Evidence Requirements",
            "Validation Procedures",
            "Compliance Documentation",
            "Best Practice Implementation",
        ),
    )

    branches = (
        TopicBranch(
            id="assessment-data-governance",
            triggers=("data governance",),
            subcategory="Data Governance",
            answer=(
                "Data Governance Assessment requires: 1) Data inventory and classification, 2) Data quality "
                "monitoring procedures, 3) Data access controls and permissions, 4) Data retention and "
                "disposal policies, 5) Data lineage documentation. Evidence required includes data "
                "governance policies, monitoring dashboards, access logs, and audit reports."
            ),
            sources=(
                Source(
                    type=SourceType.ASSESSMENT,
                    title="Data Governance Framework Assessment",
                    content="Comprehensive data governance requirements and evidence collection",
                    url="/assessment?section=data-governance",
                ),
            ),
            action_items=(
                "Document data inventory and classification",
                "Implement data quality monitoring",
                "Establish data access controls",
                "Create data retention policies",
                "Maintain data lineage documentation",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.7,
        ),
        TopicBranch(
            id="assessment-model-validation",
            triggers=("model validation",),
            subcategory="Model Validation",
            answer=(
                "AI Model Validation Assessment requires: 1) Validation protocol development, 2) Performance "
                "testing across diverse datasets, 3) Bias detection and mitigation, 4) Clinical validation "
                "studies, 5) Ongoing performance monitoring. Evidence includes validation reports, test "
                "results, bias analysis, and monitoring dashboards."
            ),
            sources=(
                Source(
                    type=SourceType.ASSESSMENT,
                    title="AI Model Validation Requirements",
                    content="Comprehensive model validation framework and testing procedures",
                    url="/assessment?section=model-validation",
                ),
            ),
            action_items=(
                "Develop validation protocols",
                "Conduct performance testing",
                "Implement bias detection",
                "Execute clinical validation",
                "Establish monitoring systems",
            ),
            impact_level=ImpactLevel.CRITICAL,
            confidence=0.7,
        ),
        TopicBranch(
            id="assessment-risk",
            triggers=("risk assessment",),
            subcategory="Risk Assessment",
            answer=(
                "AI Risk Assessment requires: 1) Risk identification and categorization, 2) Impact and "
                "likelihood analysis, 3) Risk mitigation strategies, 4) Residual risk evaluation, 5) Risk "
                "monitoring and review. Evidence includes risk registers, impact assessments, mitigation "
                "plans, and monitoring reports."
            ),
            sources=(
                Source(
                    type=SourceType.ASSESSMENT,
                    title="AI Risk Management Framework",
                    content="Comprehensive risk assessment methodology and requirements",
                    url="/assessment?section=risk-management",
                ),
            ),
            action_items=(
                "Identify and categorize risks",
                "Analyze impact and likelihood",
                "Develop mitigation strategies",
                "Evaluate residual risks",
                "Implement risk monitoring",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.7,
        ),
        TopicBranch(
            id="assessment-production-blocker",
            triggers=("production blocker",),
            subcategory="Production Blockers",
            answer=(
                "Production blocker questions must be fully satisfied before an AI system can go live. "
                "Each blocker requires documented evidence reviewed by the responsible roles, and a single "
                "unresolved blocker holds the whole release regardless of the overall assessment score."
            ),
            sources=(
                Source(
                    type=SourceType.ASSESSMENT,
                    title="Production Blocker Requirements",
                    content="Assessment questions that gate production release",
                    url="/assessment?filter=production-blockers",
                ),
            ),
            action_items=(
                "CRITICAL: Resolve all production blockers before release",
                "Gather the required evidence for each blocker",
                "Engage the responsible roles for sign-off",
                "Submit for review and approval",
            ),
            impact_level=ImpactLevel.CRITICAL,
            confidence=0.7,
        ),
        TopicBranch(
            id="assessment-evidence",
            triggers=("evidence", "documentation", "assessment"),
            subcategory="General Assessment",
            answer=(
                "Assessment Support provides guidance on completing compliance assessments, including "
                "evidence requirements, documentation standards, and validation procedures. Each "
                "assessment section has specific requirements and responsible roles. I can provide "
                "detailed guidance on specific assessment areas."
            ),
            sources=(
                Source(
                    type=SourceType.ASSESSMENT,
                    title="Assessment Support Framework",
                    content="Comprehensive assessment guidance and support",
                    url="/assessment",
                ),
            ),
            action_items=(
                "Review assessment requirements",
                "Gather required evidence",
                "Complete documentation",
                "Validate compliance",
                "Submit for review",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.7,
        ),
    )

    def __init__(
        self,
        composer: ResponseComposer,
        lookup: Optional[KnowledgeLookupService] = None,
        matcher: Optional[KnowledgeMatcher] = None,
        personalizer: Optional[Personalizer] = None,
        question_bank: Optional[AssessmentQuestionLookupService] = None,
    ):
        super().__init__(composer, lookup=lookup, matcher=matcher, personalizer=personalizer)
        self._question_bank = question_bank

    def pipeline(self) -> List[Tuple[str, Step]]:
        steps = super().pipeline()
        steps.insert(1, ("records", self._lookup_question_bank))
        return steps

    async def _lookup_question_bank(self, question: str, normalized: str) -> StepOutcome:
        if self._question_bank is None:
            return NoMatch(step="records")

        questions = await self._question_bank.questions(question)
        if not questions:
            return NoMatch(step="records")
        return Matched(self._composer.from_assessment_questions(questions, self.name))
