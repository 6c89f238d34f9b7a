"""
Agents Value Objects
====================

Immutable value objects for question routing.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared between concurrent requests.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from askrexi.config import (
    DomainName, ImpactLevel, MatchRule, ResponseCategory,
    IMPACT_LEVELS, MATCH_RULES
)
from askrexi.agents.domain.entities import AgentResponse, Source
from askrexi.knowledge.domain import contains_all, contains_any, contains_term, count_term


# ========== Routing Table ==========

def _clean_terms(terms: Tuple[str, ...]) -> Tuple[str, ...]:
    cleaned = tuple(" ".join(term.lower().split()) for term in terms)
    return tuple(term for term in cleaned if term)


class PriorityRule(BaseModel):
    """Highly specific marker terms that send a question straight to a domain."""
    model_config = ConfigDict(frozen=True)

    domain: str = Field(description="Target domain")
    terms: Tuple[str, ...] = Field(min_length=1, description="Marker terms, any of which fires")

    @field_validator("terms")
    @classmethod
    def normalize_terms(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Lowercase and collapse whitespace."""
        return _clean_terms(v)


class DomainKeywords(BaseModel):
    """Generic scoring keywords of one domain."""
    model_config = ConfigDict(frozen=True)

    domain: str = Field(description="Domain name")
    keywords: Tuple[str, ...] = Field(default_factory=tuple, description="Scoring keywords")

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return _clean_terms(v)


DEFAULT_PRIORITY_RULES: List[Dict] = [
    {"domain": DomainName.REGULATORY, "terms": ["fda", "food and drug administration"]},
    {"domain": DomainName.REGULATORY, "terms": ["ema", "european medicines agency"]},
    {"domain": DomainName.REGULATORY, "terms": ["ich", "international council for harmonisation"]},
    {"domain": DomainName.REGULATORY, "terms": [
        "21 cfr", "eu ai act", "gmlp", "good machine learning practice",
        "samd", "software as medical device",
    ]},
    {"domain": DomainName.ASSESSMENT, "terms": ["production blocker"]},
    {"domain": DomainName.ANALYTICS, "terms": ["gap analysis", "compliance score"]},
]

DEFAULT_DOMAIN_KEYWORDS: List[Dict] = [
    {"domain": DomainName.REGULATORY, "keywords": [
        "fda", "ema", "ich", "regulation", "guideline", "compliance", "regulatory",
        "approval", "submission", "clinical trial", "safety", "efficacy", "gcp",
        "gmp", "glp", "qms", "risk management", "pharmacovigilance", "samd",
        "ai/ml action plan", "gmlp", "eu ai act", "gdpr", "21 cfr part 11",
    ]},
    {"domain": DomainName.ASSESSMENT, "keywords": [
        "assessment", "question", "section", "requirement", "evidence", "documentation",
        "validation", "verification", "testing", "protocol", "sop", "checklist",
        "audit", "inspection", "governance", "data governance", "model validation",
        "quality assurance", "risk assessment", "production blocker",
    ]},
    {"domain": DomainName.ANALYTICS, "keywords": [
        "analytics", "report", "performance", "score", "trend", "metric", "dashboard",
        "insight", "recommendation", "benchmark", "comparison", "statistics", "data",
        "kpi", "roi", "compliance score", "industry benchmark", "performance trend",
        "gap analysis", "remediation plan",
    ]},
    {"domain": DomainName.GENERAL, "keywords": [
        "compliance", "best practice", "implementation", "training", "competency",
        "governance", "policy", "procedure", "standard", "framework", "guidance",
        "help", "support", "getting started", "how to", "what is", "explain",
    ]},
]


class RoutingTable(BaseModel):
    """
    Routing configuration loaded once at startup.

    Priority rules are checked in order and the first hit wins. Otherwise each
    domain scores the number of its keyword occurrences; ties go to the domain
    declared first, and an all-zero score goes to default_domain.
    """
    model_config = ConfigDict(frozen=True)

    priority_rules: Tuple[PriorityRule, ...] = Field(
        default_factory=lambda: tuple(PriorityRule(**rule) for rule in DEFAULT_PRIORITY_RULES),
        description="Ordered priority overrides"
    )
    domains: Tuple[DomainKeywords, ...] = Field(
        default_factory=lambda: tuple(DomainKeywords(**entry) for entry in DEFAULT_DOMAIN_KEYWORDS),
        description="Scoring keywords in declaration order"
    )
    default_domain: str = Field(default=DomainName.GENERAL, description="Domain for unscored questions")

    @model_validator(mode="after")
    def validate_domains(self) -> "RoutingTable":
        """Every referenced domain must be declared exactly once."""
        declared = [entry.domain for entry in self.domains]
        if not declared:
            raise ValueError("routing table declares no domains")
        if len(set(declared)) != len(declared):
            raise ValueError(f"duplicate domains in routing table: {declared}")
        for rule in self.priority_rules:
            if rule.domain not in declared:
                raise ValueError(f"priority rule targets undeclared domain '{rule.domain}'")
        if self.default_domain not in declared:
            raise ValueError(f"default domain '{self.default_domain}' is not declared")
        return self

    @property
    def domain_names(self) -> Tuple[str, ...]:
        return tuple(entry.domain for entry in self.domains)


class RoutingReason:
    """Why a domain was chosen."""
    PRIORITY = "priority"
    KEYWORDS = "keywords"
    DEFAULT = "default"


@dataclass(frozen=True)
class RoutingDecision:
    """Which domain a question goes to and why."""
    domain: str
    reason: str  # priority, keywords or default
    matched_term: Optional[str] = None
    scores: Dict[str, int] = field(default_factory=dict)


class DomainSelector:
    """Pure routing decision over a RoutingTable."""

    def __init__(self, table: RoutingTable):
        self._table = table

    @property
    def table(self) -> RoutingTable:
        return self._table

    def select(self, normalized_question: str) -> RoutingDecision:
        for rule in self._table.priority_rules:
            for term in rule.terms:
                if contains_term(normalized_question, term):
                    return RoutingDecision(
                        domain=rule.domain,
                        reason=RoutingReason.PRIORITY,
                        matched_term=term,
                    )

        scores = {
            entry.domain: sum(count_term(normalized_question, keyword) for keyword in entry.keywords)
            for entry in self._table.domains
        }

        best_domain, best_score = None, 0
        for domain in self._table.domain_names:
            if scores[domain] > best_score:
                best_domain, best_score = domain, scores[domain]

        if best_domain is None:
            return RoutingDecision(
                domain=self._table.default_domain,
                reason=RoutingReason.DEFAULT,
                scores=scores,
            )
        return RoutingDecision(domain=best_domain, reason=RoutingReason.KEYWORDS, scores=scores)


# ========== Confidence ==========

class ConfidenceCalculator:
    """
    Final answer confidence.

    0.5 base, +0.2 for a non-general category, +0.1 for high or critical
    impact, +0.1 when sources are cited, +0.1 when action items are given,
    capped at 1.0.
    """

    BASE = 0.5
    FALLBACK = 0.5

    @staticmethod
    def calculate(response: AgentResponse) -> float:
        confidence = ConfidenceCalculator.BASE
        if response.category != ResponseCategory.GENERAL:
            confidence += 0.2
        if response.impact_level in (ImpactLevel.HIGH, ImpactLevel.CRITICAL):
            confidence += 0.1
        if response.sources:
            confidence += 0.1
        if response.action_items:
            confidence += 0.1
        return round(min(confidence, 1.0), 2)


# ========== Topic Branches ==========

@dataclass(frozen=True)
class TopicBranch:
    """
    One fixed answer guarded by trigger phrases.

    Fires when the triggers are present per rule ("any" or "all") and every
    phrase in requires is present as well.
    """
    id: str
    triggers: Tuple[str, ...]
    subcategory: str
    answer: str
    sources: Tuple[Source, ...] = ()
    action_items: Tuple[str, ...] = ()
    impact_level: str = ImpactLevel.MEDIUM
    confidence: float = 0.8
    rule: str = MatchRule.ANY
    requires: Tuple[str, ...] = ()
    category: Optional[str] = None

    def __post_init__(self):
        if not self.triggers:
            raise ValueError(f"branch {self.id} has no triggers")
        if self.rule not in MATCH_RULES:
            raise ValueError(f"rule must be one of {MATCH_RULES}")
        if self.impact_level not in IMPACT_LEVELS:
            raise ValueError(f"impact_level must be one of {IMPACT_LEVELS}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")

    def fires(self, normalized_question: str) -> bool:
        if self.rule == MatchRule.ALL:
            hit = contains_all(normalized_question, self.triggers)
        else:
            hit = contains_any(normalized_question, self.triggers)
        return hit and contains_all(normalized_question, self.requires)


def first_firing(branches: Tuple[TopicBranch, ...], normalized_question: str) -> Optional[TopicBranch]:
    """First branch in declared order whose triggers fire."""
    for branch in branches:
        if branch.fires(normalized_question):
            return branch
    return None


# ========== Pipeline Outcomes ==========

@dataclass(frozen=True)
class Matched:
    """A pipeline step produced an answer."""
    response: AgentResponse


@dataclass(frozen=True)
class NoMatch:
    """A pipeline step had nothing to say; try the next one."""
    step: str = ""


@dataclass(frozen=True)
class Fault:
    """A pipeline step failed unexpectedly."""
    error: Exception
    step: str = ""


StepOutcome = Union[Matched, NoMatch, Fault]
HandlerOutcome = Union[Matched, Fault]
