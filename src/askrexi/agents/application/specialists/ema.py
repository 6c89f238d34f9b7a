"""
EMA Specialist
==============

European Medicines Agency guidance, GDPR and the EU AI Act.
"""

from askrexi.config import ImpactLevel, SourceType
from askrexi.agents.domain import DomainCapability, Source, TopicBranch
from askrexi.agents.domain.composer import EMA_AI_REFLECTION_URL
from askrexi.agents.application.specialists.base import TopicSpecialist


class EMASpecialist(TopicSpecialist):
    """EMA AI Reflection Paper, GDPR, EU AI Act and algorithmic accountability."""

    name = "ema"
    authority_terms = ("ema", "european medicines agency")

    capability = DomainCapability(
        domain="ema",
        subdomains=("AI Reflection Paper", "GDPR Compliance", "EU AI Act", "Clinical Trials", "Drug Development"),
        keywords=(
            "ema", "european medicines agency", "eu", "european union", "reflection paper", "ai reflection paper",
            "gdpr", "general data protection regulation", "data protection", "privacy", "personal data",
            "eu ai act", "artificial intelligence act", "ai act", "algorithmic accountability",
            "data governance", "transparency", "explainability", "human oversight", "risk-based approach",
            "clinical trial", "clinical study", "gcp", "good clinical practice", "pharmacovigilance",
            "drug development", "medicinal product", "marketing authorization", "centralized procedure",
            "decentralized procedure", "mutual recognition", "national procedure",
        ),
        expertise=(
            "EMA AI Reflection Paper",
            "GDPR Compliance for AI",
            "EU AI Act Requirements",
            "European Clinical Trial Regulations",
            "Data Protection and Privacy",
            "Algorithmic Accountability",
            "Risk-Based AI Regulation",
        ),
    )

    branches = (
        TopicBranch(
            id="ema-reflection-paper",
            triggers=("reflection paper",),
            subcategory="EMA AI Reflection Paper",
            answer=(
                "The EMA Reflection Paper on AI in Medicinal Product Development provides comprehensive "
                "guidance for AI use in pharmaceutical development:\n\n"
                "**Key EMA AI Requirements:**\n"
                "• **Algorithmic Accountability** - Clear responsibility for AI system outcomes\n"
                "• **Data Governance** - Robust data management and protection protocols\n"
                "• **Transparency and Explainability** - Ability to explain AI decision-making processes\n"
                "• **Risk-Based Approach** - Risk assessment based on AI system impact and complexity\n"
                "• **Human Oversight** - Human-in-the-loop requirements for critical decisions\n\n"
                "**Pharmaceutical AI Applications:**\n"
                "• Drug discovery and development AI tools\n"
                "• Clinical trial optimization and patient selection\n"
                "• Pharmacovigilance and safety monitoring\n"
                "• Manufacturing process optimization\n"
                "• Real-world evidence generation\n\n"
                "**Core Principles:**\n"
                "• AI systems must be scientifically sound and clinically relevant\n"
                "• Data quality and integrity are paramount\n"
                "• AI systems must be validated and monitored\n"
                "• Regulatory compliance must be maintained throughout the AI lifecycle\n"
                "• Patient safety and data protection are top priorities"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="EMA Reflection Paper on AI in Medicinal Product Development",
                    content="EMA guidance on AI use in pharmaceutical development",
                    url=EMA_AI_REFLECTION_URL,
                ),
            ),
            action_items=(
                "Review EMA Reflection Paper on AI in Medicinal Product Development",
                "Implement algorithmic accountability frameworks",
                "Establish data governance protocols",
                "Develop AI transparency and explainability measures",
                "Conduct risk assessments for AI applications",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.95,
        ),
        TopicBranch(
            id="ema-gdpr",
            triggers=("gdpr", "data protection"),
            subcategory="GDPR Compliance",
            answer=(
                "GDPR significantly impacts AI systems in pharmaceutical companies:\n\n"
                "**Key GDPR Requirements for AI:**\n"
                "• **Data Protection by Design** - Privacy considerations in AI system development\n"
                "• **Lawful Basis for Processing** - Clear legal grounds for AI data processing\n"
                "• **Data Subject Rights** - Right to explanation for AI decisions\n"
                "• **Data Minimization** - Collecting only necessary data for AI training\n"
                "• **Cross-Border Data Transfers** - Adequate protection for international AI data sharing\n\n"
                "**AI-Specific GDPR Considerations:**\n"
                "• AI systems must be transparent and explainable\n"
                "• Data subjects have the right to understand AI decision-making\n"
                "• AI training data must be lawfully obtained and processed\n"
                "• Data retention policies must be defined for AI systems\n"
                "• Privacy impact assessments are required for AI systems"
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="General Data Protection Regulation (GDPR)",
                    content="EU data protection regulation",
                    url="https://gdpr.eu/",
                ),
                Source(
                    type=SourceType.GUIDANCE,
                    title="GDPR and AI Guidelines",
                    content="Guidance on GDPR compliance for AI systems",
                    url="https://edpb.europa.eu/our-work-tools/general-guidance/artificial-intelligence-and-data-protection_en",
                ),
            ),
            action_items=(
                "Implement Privacy by Design in AI systems",
                "Establish lawful basis for AI data processing",
                "Develop AI explainability frameworks",
                "Conduct data protection impact assessments",
                "Implement data subject rights procedures",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
        TopicBranch(
            id="ema-eu-ai-act",
            triggers=("eu ai act", "ai act", "artificial intelligence act"),
            subcategory="EU AI Act",
            answer=(
                "The EU AI Act establishes comprehensive regulation for AI systems in the European Union:\n\n"
                "**AI Act Classification:**\n"
                "• **Minimal Risk** - AI systems with minimal risk (e.g., spam filters)\n"
                "• **Limited Risk** - AI systems with limited risk (e.g., chatbots)\n"
                "• **High Risk** - AI systems with high risk (e.g., medical devices, critical infrastructure)\n"
                "• **Prohibited** - AI systems that are prohibited (e.g., social scoring, subliminal manipulation)\n\n"
                "**High-Risk AI Requirements:**\n"
                "• **Risk Management System** - Comprehensive risk assessment and mitigation\n"
                "• **Data Governance** - High-quality training data and data management\n"
                "• **Technical Documentation** - Detailed technical documentation\n"
                "• **Record Keeping** - Comprehensive record keeping requirements\n"
                "• **Transparency and Information** - Clear information to users\n"
                "• **Human Oversight** - Human oversight and monitoring\n"
                "• **Accuracy, Robustness, and Cybersecurity** - System accuracy and security\n\n"
                "**Pharmaceutical AI Implications:**\n"
                "• Medical AI systems are classified as high-risk\n"
                "• Comprehensive compliance requirements apply\n"
                "• Regulatory oversight and monitoring required\n"
                "• Significant penalties for non-compliance"
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="EU AI Act",
                    content="European Union Artificial Intelligence Act",
                    url="https://digital-strategy.ec.europa.eu/en/policies/regulatory-framework-ai",
                ),
            ),
            action_items=(
                "Assess AI system risk classification under EU AI Act",
                "Implement risk management systems for high-risk AI",
                "Develop comprehensive technical documentation",
                "Establish human oversight and monitoring procedures",
                "Ensure compliance with EU AI Act requirements",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
        TopicBranch(
            id="ema-algorithmic-accountability",
            triggers=("algorithmic accountability",),
            subcategory="Algorithmic Accountability",
            answer=(
                "Algorithmic Accountability is a key requirement for AI systems in pharmaceutical applications:\n\n"
                "**Key Principles:**\n"
                "• **Clear Responsibility** - Defined roles and responsibilities for AI system outcomes\n"
                "• **Transparency** - Openness about AI system design, operation, and limitations\n"
                "• **Explainability** - Ability to explain AI decision-making processes\n"
                "• **Auditability** - Systems must be auditable and monitorable\n"
                "• **Human Oversight** - Human control and intervention capabilities\n\n"
                "**Implementation Requirements:**\n"
                "• Establish clear governance structures for AI systems\n"
                "• Define roles and responsibilities for AI outcomes\n"
                "• Implement transparency and explainability measures\n"
                "• Develop audit and monitoring procedures\n"
                "• Ensure human oversight and control mechanisms"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="Algorithmic Accountability Framework",
                    content="Framework for ensuring AI system accountability",
                    url=EMA_AI_REFLECTION_URL,
                ),
            ),
            action_items=(
                "Establish AI governance structures",
                "Define clear roles and responsibilities",
                "Implement transparency and explainability measures",
                "Develop audit and monitoring procedures",
                "Ensure human oversight and control",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
    )
