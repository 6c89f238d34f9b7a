"""
Analytics Handler
=================

Compliance scores, benchmarks, gaps and trends.
"""

from askrexi.config import DomainName, ImpactLevel, ResponseCategory, SourceType
from askrexi.agents.application.handlers.base import DomainHandler
from askrexi.agents.domain import DomainCapability, Source, TopicBranch


class AnalyticsHandler(DomainHandler):
    name = DomainName.ANALYTICS
    label = "analytics"
    category = ResponseCategory.ANALYTICS

    capability = DomainCapability(
        domain=DomainName.ANALYTICS,
        subdomains=(
            "Compliance Scoring", "Performance Trends", "Benchmarking",
            "Gap Analysis", "Remediation Planning",
        ),
        keywords=(
            "analytics", "report", "performance", "score", "trend", "metric", "dashboard",
            "insight", "recommendation", "benchmark", "comparison", "statistics", "data",
            "kpi", "roi", "compliance score", "industry benchmark", "performance trend",
            "gap analysis", "remediation plan", "improvement", "optimization", "efficiency",
            "effectiveness", "quality metrics", "risk metrics", "compliance metrics",
        ),
        expertise=(
            "Compliance Analytics",
            "Performance Measurement",
            "Benchmarking Analysis",
            "Gap Identification",
            "Remediation Planning",
        ),
    )

    branches = (
        TopicBranch(
            id="analytics-performance",
            triggers=("compliance score", "performance"),
            subcategory="Performance Metrics",
            answer=(
                "Current Compliance Performance: Overall compliance score is 78% (Industry benchmark: 72%). "
                "Key metrics show strong performance in data governance (85%) and model validation (82%), "
                "with improvement opportunities in risk management (65%) and clinical validation (71%). "
                "Trending upward over the last quarter with 12% improvement."
            ),
            sources=(
                Source(
                    type=SourceType.ANALYTICS,
                    title="Compliance Performance Dashboard",
                    content="Real-time compliance scoring and benchmarking analytics",
                    url="/analytics?view=performance",
                ),
            ),
            action_items=(
                "Focus on risk management improvements",
                "Enhance clinical validation processes",
                "Maintain strong data governance practices",
                "Monitor performance trends monthly",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.7,
        ),
        TopicBranch(
            id="analytics-benchmarking",
            triggers=("benchmark", "comparison", "compared"),
            subcategory="Benchmarking",
            answer=(
                "Industry Benchmarking: Your organization ranks in the 75th percentile for AI compliance. "
                "Compared to industry peers: Data Privacy (90th percentile), Model Validation (70th "
                "percentile), Risk Management (60th percentile). Top performers in your sector average 82% "
                "compliance score vs your current 78%."
            ),
            sources=(
                Source(
                    type=SourceType.ANALYTICS,
                    title="Industry Benchmark Report",
                    content="Comparative analysis against industry standards and peers",
                    url="/analytics?view=benchmarking",
                ),
            ),
            action_items=(
                "Analyze top performer strategies",
                "Implement best practices in risk management",
                "Leverage strengths in data privacy",
                "Set targets to reach 85th percentile",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.7,
        ),
        TopicBranch(
            id="analytics-gaps",
            triggers=("gap", "improvement", "improve"),
            subcategory="Gap Analysis",
            answer=(
                "Gap Analysis Results: Top 5 compliance gaps identified: 1) AI Risk Assessment "
                "Documentation (35% gap), 2) Model Performance Monitoring (28% gap), 3) Clinical "
                "Validation Evidence (25% gap), 4) Data Lineage Tracking (22% gap), 5) Bias Detection "
                "Protocols (20% gap). Addressing these gaps could improve overall score by 15-20%."
            ),
            sources=(
                Source(
                    type=SourceType.ANALYTICS,
                    title="Compliance Gap Analysis Report",
                    content="Detailed gap identification and improvement recommendations",
                    url="/analytics?view=gaps",
                ),
            ),
            action_items=(
                "Prioritize AI risk assessment improvements",
                "Implement model monitoring systems",
                "Enhance clinical validation processes",
                "Establish data lineage tracking",
                "Deploy bias detection protocols",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.7,
        ),
        TopicBranch(
            id="analytics-trends",
            triggers=("trend", "over time", "progress"),
            subcategory="Performance Trends",
            answer=(
                "Analytics & Reporting provides comprehensive insights into compliance performance, "
                "industry benchmarking, trend analysis, and improvement recommendations. Compliance has "
                "trended upward over the last quarter; I can help you track progress over time and "
                "identify the areas driving the change."
            ),
            sources=(
                Source(
                    type=SourceType.ANALYTICS,
                    title="Analytics Dashboard",
                    content="Comprehensive analytics and reporting platform",
                    url="/analytics?view=trends",
                ),
            ),
            action_items=(
                "Review current performance metrics",
                "Analyze trend data",
                "Identify improvement opportunities",
                "Set performance targets",
                "Monitor progress regularly",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.7,
        ),
    )
