"""
General Regulatory Specialist
=============================

Regulatory questions not tied to a single authority.
"""

from askrexi.config import ImpactLevel, SourceType
from askrexi.agents.domain import DomainCapability, Source, TopicBranch
from askrexi.agents.application.specialists.base import TopicSpecialist


class GeneralRegulatorySpecialist(TopicSpecialist):
    """International harmonization, quality standards, strategy and intelligence."""

    name = "general-regulatory"

    capability = DomainCapability(
        domain="general-regulatory",
        subdomains=(
            "International Regulations", "Quality Standards",
            "Compliance Frameworks", "Regulatory Trends",
        ),
        keywords=(
            "regulation", "regulatory", "compliance", "guideline", "standard", "framework",
            "international", "global", "harmonization", "quality", "safety", "efficacy",
            "regulatory authority", "health authority", "mhra", "health canada", "tga",
            "pmda", "anvisa", "nmpa", "who", "world health organization",
            "iso", "international organization for standardization",
            "regulatory intelligence", "regulatory update", "regulatory change",
            "regulatory submission", "regulatory pathway", "regulatory strategy",
        ),
        expertise=(
            "International Regulatory Harmonization",
            "Quality Management Systems",
            "Regulatory Intelligence",
            "Regulatory Strategy",
            "Compliance Frameworks",
        ),
    )

    branches = (
        TopicBranch(
            id="general-regulatory-international",
            triggers=("international", "global"),
            subcategory="International Regulations",
            answer=(
                "International regulatory harmonization is crucial for global pharmaceutical development:\n\n"
                "**Key International Regulatory Bodies:**\n"
                "• **WHO** - World Health Organization for global health standards\n"
                "• **ICH** - International Council for Harmonisation for regulatory harmonization\n"
                "• **ISO** - International Organization for Standardization for quality standards\n"
                "• **IEC** - International Electrotechnical Commission for technical standards\n\n"
                "**Regional Regulatory Authorities:**\n"
                "• **FDA** - United States Food and Drug Administration\n"
                "• **EMA** - European Medicines Agency\n"
                "• **MHRA** - UK Medicines and Healthcare products Regulatory Agency\n"
                "• **Health Canada** - Canadian regulatory authority\n"
                "• **TGA** - Australian Therapeutic Goods Administration\n"
                "• **PMDA** - Japanese Pharmaceuticals and Medical Devices Agency\n\n"
                "**Harmonization Benefits:**\n"
                "• Reduced duplication of regulatory requirements\n"
                "• Faster global product development\n"
                "• Improved patient access to medicines\n"
                "• Enhanced regulatory efficiency\n"
                "• Consistent quality and safety standards"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="International Regulatory Harmonization",
                    content="Guidance on international regulatory harmonization",
                    url="https://www.ich.org/",
                ),
                Source(
                    type=SourceType.GUIDANCE,
                    title="WHO Regulatory Guidelines",
                    content="WHO guidelines for regulatory authorities",
                    url="https://www.who.int/",
                ),
            ),
            action_items=(
                "Identify applicable international regulatory requirements",
                "Develop harmonized regulatory strategy",
                "Engage with international regulatory bodies",
                "Implement quality management systems",
                "Monitor regulatory harmonization developments",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.8,
        ),
        TopicBranch(
            id="general-regulatory-quality",
            triggers=("quality", "iso"),
            subcategory="Quality Standards",
            answer=(
                "Quality standards are essential for pharmaceutical regulatory compliance:\n\n"
                "**Key Quality Standards:**\n"
                "• **ISO 9001** - Quality management systems\n"
                "• **ISO 13485** - Medical devices quality management systems\n"
                "• **ISO 27001** - Information security management systems\n"
                "• **ISO 14001** - Environmental management systems\n"
                "• **ISO 45001** - Occupational health and safety management systems\n\n"
                "**Pharmaceutical-Specific Standards:**\n"
                "• **ICH Q7** - Good Manufacturing Practice for Active Pharmaceutical Ingredients\n"
                "• **ICH Q8** - Pharmaceutical Development\n"
                "• **ICH Q9** - Quality Risk Management\n"
                "• **ICH Q10** - Pharmaceutical Quality System\n"
                "• **ICH Q11** - Development and Manufacture of Drug Substances\n\n"
                "**Quality Management Principles:**\n"
                "• Customer focus and satisfaction\n"
                "• Leadership and commitment\n"
                "• Process approach and improvement\n"
                "• Evidence-based decision making\n"
                "• Continuous improvement"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="ISO Quality Standards",
                    content="International quality management standards",
                    url="https://www.iso.org/",
                ),
                Source(
                    type=SourceType.GUIDANCE,
                    title="ICH Quality Guidelines",
                    content="ICH guidelines for pharmaceutical quality",
                    url="https://www.ich.org/page/quality-guidelines",
                ),
            ),
            action_items=(
                "Implement appropriate quality management systems",
                "Conduct quality risk assessments",
                "Establish quality metrics and monitoring",
                "Train personnel on quality standards",
                "Continuously improve quality processes",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.8,
        ),
        TopicBranch(
            id="general-regulatory-strategy",
            triggers=("strategy", "planning"),
            subcategory="Regulatory Strategy",
            answer=(
                "Developing an effective regulatory strategy is crucial for successful product development:\n\n"
                "**Key Strategy Components:**\n"
                "• **Regulatory Landscape Analysis** - Understanding applicable regulations and requirements\n"
                "• **Target Market Assessment** - Identifying key markets and regulatory pathways\n"
                "• **Timeline Planning** - Developing realistic regulatory timelines\n"
                "• **Resource Allocation** - Allocating appropriate resources for regulatory activities\n"
                "• **Risk Management** - Identifying and mitigating regulatory risks\n\n"
                "**Strategic Considerations:**\n"
                "• **Early Engagement** - Engage with regulatory authorities early in development\n"
                "• **Parallel Submissions** - Consider parallel submissions in multiple regions\n"
                "• **Regulatory Intelligence** - Stay informed about regulatory changes and trends\n"
                "• **Compliance Monitoring** - Monitor and ensure ongoing compliance"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="Regulatory Strategy Development",
                    content="Guidance on developing regulatory strategies",
                    url="/regulatory/strategy",
                ),
            ),
            action_items=(
                "Conduct regulatory landscape analysis",
                "Develop comprehensive regulatory strategy",
                "Engage with regulatory authorities early",
                "Implement quality management systems",
                "Monitor regulatory landscape continuously",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.8,
        ),
        TopicBranch(
            id="general-regulatory-intelligence",
            triggers=("intelligence", "update"),
            subcategory="Regulatory Intelligence",
            answer=(
                "Regulatory intelligence is essential for staying informed about regulatory changes and trends:\n\n"
                "**Key Intelligence Areas:**\n"
                "• **Regulatory Updates** - New regulations, guidelines, and requirements\n"
                "• **Policy Changes** - Changes in regulatory policies and approaches\n"
                "• **Enforcement Actions** - Regulatory enforcement actions and penalties\n"
                "• **Industry Trends** - Industry best practices and emerging trends\n\n"
                "**Intelligence Sources:**\n"
                "• **Regulatory Authorities** - Official websites and publications\n"
                "• **Industry Associations** - Professional and industry organizations\n"
                "• **Peer Networks** - Industry peer networks and forums\n"
                "• **Regulatory Databases** - Comprehensive regulatory databases"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="Regulatory Intelligence Framework",
                    content="Framework for regulatory intelligence activities",
                    url="/regulatory/intelligence",
                ),
            ),
            action_items=(
                "Establish regulatory intelligence processes",
                "Identify key intelligence sources",
                "Develop intelligence analysis capabilities",
                "Implement intelligence sharing mechanisms",
                "Use intelligence for strategic decision making",
            ),
            impact_level=ImpactLevel.MEDIUM,
            confidence=0.8,
        ),
    )
