"""
General Compliance Handler
==========================

Default domain. Answers general compliance questions and politely declines
topics AskRexi does not cover.
"""

from typing import List, Optional, Tuple

from askrexi.config import DomainName, ImpactLevel, ResponseCategory, SourceType
from askrexi.agents.application.handlers.base import DomainHandler, Step
from askrexi.agents.domain import (
    DomainCapability, Matched, NoMatch, Source, StepOutcome, TopicBranch
)
from askrexi.knowledge.domain import contains_any

# Any of these means the question is in scope. Includes the general domain's
# routing keywords and branch triggers other than the generic "help", "support",
# "how to", "what is" and "explain".
COMPLIANCE_VOCABULARY = (
    "fda", "ema", "ich", "regulation", "guideline", "compliance", "regulatory",
    "assessment", "question", "section", "requirement", "evidence", "documentation",
    "analytics", "report", "performance", "score", "trend", "metric", "dashboard",
    "ai", "artificial intelligence", "machine learning", "model", "algorithm",
    "pharmaceutical", "pharma", "drug", "medicine", "therapeutic", "clinical",
    "quality", "governance", "risk", "safety", "efficacy", "validation",
    "askrexi", "best practice", "implementation", "training", "competency",
    "competencies", "policy", "policies", "procedure", "standard", "framework",
    "guidance", "getting started", "get started", "principles", "fundamentals",
    "gcp", "gmp", "gdpr", "privacy", "audit", "inspection", "sop", "checklist",
)

# Checked in order, only when no compliance vocabulary is present
OUT_OF_SCOPE_TOPICS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("weather", ("weather", "temperature", "rain", "snow", "sunny", "cloudy", "forecast", "climate")),
    ("sports", (
        "football", "soccer", "basketball", "baseball", "tennis", "golf", "sport",
        "game", "match", "team", "player",
    )),
    ("entertainment", (
        "movie", "film", "actor", "actress", "celebrity", "music", "song", "band",
        "concert", "entertainment",
    )),
    ("news", ("politics", "election", "president", "government", "news", "current events")),
    ("health", (
        "personal health", "medical advice", "doctor", "symptom", "illness", "disease", "treatment",
    )),
    ("technology", (
        "smartphone", "phone", "computer", "laptop", "gaming", "video game", "social media",
        "facebook", "twitter",
    )),
    ("travel", ("travel", "vacation", "hotel", "flight", "airline", "tourism", "destination", "trip")),
    ("food", ("recipe", "cooking", "food", "restaurant", "meal", "ingredient", "kitchen", "chef")),
    ("shopping", ("shopping", "store", "price", "buy", "purchase", "deal", "discount", "retail")),
    ("general knowledge", (
        "history", "geography", "science", "math", "literature", "art", "culture", "philosophy",
    )),
)


def out_of_scope_topic(normalized_question: str) -> Optional[str]:
    """Name of the unrelated topic a question is about, or None."""
    if not normalized_question or contains_any(normalized_question, COMPLIANCE_VOCABULARY):
        return None
    for topic, terms in OUT_OF_SCOPE_TOPICS:
        if contains_any(normalized_question, terms):
            return topic
    return None


class GeneralComplianceHandler(DomainHandler):
    name = DomainName.GENERAL
    label = "compliance"
    category = ResponseCategory.COMPLIANCE

    capability = DomainCapability(
        domain=DomainName.GENERAL,
        subdomains=("Best Practices", "Implementation Guidance", "Training & Competency", "General Support"),
        keywords=(
            "compliance", "best practice", "implementation", "training", "competency",
            "governance", "policy", "procedure", "standard", "framework", "guidance",
            "help", "support", "getting started", "how to", "what is", "explain",
            "overview", "introduction", "basics", "fundamentals", "principles",
            "approach", "methodology", "process", "workflow", "checklist",
        ),
        expertise=(
            "Compliance Best Practices",
            "Implementation Guidance",
            "Training and Competency Development",
            "General Compliance Support",
        ),
    )

    branches = (
        TopicBranch(
            id="general-capabilities",
            triggers=("askrexi", "help"),
            requires=("what",),
            subcategory="General Support",
            answer=(
                "AskRexi is your intelligent regulatory compliance assistant. I can help you with: "
                "• **Regulatory Intelligence** - FDA, EMA, ICH guidelines and their impact "
                "• **Assessment Support** - Guidance on specific questions and requirements "
                "• **Analytics & Reporting** - Performance insights and recommendations "
                "• **Compliance Guidance** - What you need to do to meet requirements."
            ),
            sources=(
                Source(
                    type=SourceType.COMPLIANCE,
                    title="AskRexi Capabilities Overview",
                    content="Comprehensive compliance assistance across all regulatory domains",
                    url="/help/askrexi-capabilities",
                ),
            ),
            action_items=(
                "Ask about specific FDA, EMA, or ICH regulations",
                "Get guidance on assessment questions",
                "Request analytics and performance insights",
                "Learn about compliance requirements for your area",
            ),
            impact_level=ImpactLevel.LOW,
            confidence=0.95,
        ),
        TopicBranch(
            id="general-getting-started",
            triggers=("getting started", "how to start", "get started"),
            subcategory="Implementation Guidance",
            answer=(
                "Getting Started with Compliance: 1) **Assess Current State** - Complete initial compliance "
                "assessment to identify gaps, 2) **Prioritize Requirements** - Focus on critical and "
                "high-impact areas first, 3) **Develop Implementation Plan** - Create timeline and assign "
                "responsibilities, 4) **Implement Controls** - Deploy necessary processes and systems, "
                "5) **Monitor and Improve** - Continuously monitor and optimize compliance posture."
            ),
            sources=(
                Source(
                    type=SourceType.COMPLIANCE,
                    title="Compliance Implementation Guide",
                    content="Step-by-step guidance for implementing compliance programs",
                    url="/guides/getting-started",
                ),
            ),
            action_items=(
                "Complete initial compliance assessment",
                "Identify critical compliance gaps",
                "Develop prioritized implementation plan",
                "Assign roles and responsibilities",
                "Establish monitoring processes",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.9,
        ),
        TopicBranch(
            id="general-best-practices",
            triggers=("best practice", "principles"),
            subcategory="Best Practices",
            answer=(
                "Compliance Best Practices: 1) **Risk-Based Approach** - Focus resources on highest risk "
                "areas, 2) **Documentation Excellence** - Maintain comprehensive, accurate records, "
                "3) **Continuous Monitoring** - Implement ongoing compliance monitoring, 4) **Training & "
                "Competency** - Ensure staff understand requirements, 5) **Regular Reviews** - Conduct "
                "periodic assessments and updates, 6) **Stakeholder Engagement** - Involve all relevant "
                "parties in compliance efforts."
            ),
            sources=(
                Source(
                    type=SourceType.COMPLIANCE,
                    title="Compliance Best Practices Framework",
                    content="Industry-leading practices for compliance program excellence",
                    url="/guides/best-practices",
                ),
            ),
            action_items=(
                "Implement risk-based compliance approach",
                "Establish documentation standards",
                "Deploy continuous monitoring systems",
                "Develop training programs",
                "Schedule regular compliance reviews",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.85,
        ),
        TopicBranch(
            id="general-training",
            triggers=("training", "competency"),
            subcategory="Training & Competency",
            answer=(
                "Compliance Training & Competency: 1) **Role-Based Training** - Tailor training to specific "
                "job functions, 2) **Regulatory Updates** - Keep current with changing requirements, "
                "3) **Practical Application** - Include hands-on exercises and real scenarios, "
                "4) **Competency Assessment** - Verify understanding through testing, 5) **Continuous "
                "Learning** - Provide ongoing education opportunities, 6) **Documentation** - Maintain "
                "training records and certifications."
            ),
            sources=(
                Source(
                    type=SourceType.COMPLIANCE,
                    title="Compliance Training Program",
                    content="Comprehensive training and competency development framework",
                    url="/training/compliance-program",
                ),
            ),
            action_items=(
                "Assess current competency levels",
                "Develop role-based training curricula",
                "Implement competency assessments",
                "Establish continuous learning programs",
                "Maintain training documentation",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.8,
        ),
        TopicBranch(
            id="general-frameworks",
            triggers=(
                "framework", "policy", "policies", "procedure", "governance",
                "fundamentals", "basics", "overview",
            ),
            subcategory="General Guidance",
            answer=(
                "Compliance Guidance: I provide support across all compliance domains including regulatory "
                "intelligence, assessment guidance, analytics insights, and implementation support. A "
                "compliance framework ties these together through documented policies, clear procedures, "
                "assigned ownership, and regular review."
            ),
            sources=(
                Source(
                    type=SourceType.COMPLIANCE,
                    title="Comprehensive Compliance Support",
                    content="Full-spectrum compliance assistance and guidance",
                    url="/compliance/support",
                ),
            ),
            action_items=(
                "Specify your compliance question or area of interest",
                "Provide context about your organization or situation",
                "Ask about specific regulatory requirements",
                "Request analytics or performance insights",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.75,
        ),
    )

    def pipeline(self) -> List[Tuple[str, Step]]:
        return [("scope", self._decline_out_of_scope)] + super().pipeline()

    async def _decline_out_of_scope(self, question: str, normalized: str) -> StepOutcome:
        topic = out_of_scope_topic(normalized)
        if topic is None:
            return NoMatch(step="scope")
        return Matched(self._composer.compose(
            domain=self.name,
            category=ResponseCategory.GENERAL,
            subcategory="out-of-scope",
            answer=(
                "I'm AskRexi, your regulatory compliance assistant. I specialize in helping with "
                "regulatory intelligence, assessment support, and analytics for pharmaceutical AI "
                f"compliance. I can't help with {topic} questions, but I'd be happy to assist you "
                "with compliance-related questions!"
            ),
            action_items=(
                "Ask about FDA, EMA, or ICH regulations",
                "Get guidance on assessment questions",
                "Request analytics and performance insights",
                "Learn about compliance requirements",
            ),
            impact_level=ImpactLevel.LOW,
            confidence=0.9,
        ))
