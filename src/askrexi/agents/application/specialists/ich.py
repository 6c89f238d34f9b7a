"""
ICH Specialist
==============

International Council for Harmonisation efficacy guidelines.
"""

from askrexi.config import ImpactLevel, SourceType
from askrexi.agents.domain import DomainCapability, Source, TopicBranch
from askrexi.agents.domain.composer import ICH_E6_URL
from askrexi.agents.application.specialists.base import TopicSpecialist


class ICHSpecialist(TopicSpecialist):
    """ICH E6(R3), E8(R1), E9(R1), E17 and clinical trials in general."""

    name = "ich"
    authority_terms = ("ich", "international council for harmonisation")

    capability = DomainCapability(
        domain="ich",
        subdomains=(
            "GCP Guidelines", "Clinical Study Design", "Statistical Principles",
            "Quality Guidelines", "Safety Guidelines",
        ),
        keywords=(
            "ich", "international council for harmonisation", "e6", "e6(r3)", "good clinical practice", "gcp",
            "e8", "e8(r1)", "general considerations", "clinical studies", "e9", "e9(r1)", "statistical principles",
            "e10", "choice of control group", "e17", "multi-regional clinical trials", "mrct",
            "e3", "clinical study report", "csr", "e2a", "clinical safety data management",
            "e2c", "periodic benefit-risk evaluation report",
            "e2d", "post-approval safety data management", "e2e", "pharmacovigilance planning",
            "e4", "dose-response information", "e5", "ethnic factors", "e7", "geriatric populations",
            "e11", "clinical investigation of medicinal products", "e12", "clinical evaluation",
            "e13", "bioequivalence", "e15", "genomic biomarkers", "e18", "genomic sampling",
            "e19", "safety data collection",
            "clinical trial", "clinical study", "protocol", "informed consent", "irb", "iec",
            "adverse event", "serious adverse event", "sae", "data monitoring committee", "dmc",
            "investigator brochure", "case report form", "crf", "source data verification", "sdv",
            "monitoring", "audit", "inspection", "regulatory authority", "sponsor", "investigator",
        ),
        expertise=(
            "ICH E6(R3) Good Clinical Practice",
            "ICH E8(R1) General Considerations for Clinical Studies",
            "ICH E9(R1) Statistical Principles for Clinical Trials",
            "ICH E17 Multi-Regional Clinical Trials",
            "Clinical Trial Design and Conduct",
            "Data Integrity and Quality",
            "Safety Data Management",
        ),
    )

    branches = (
        TopicBranch(
            id="ich-e6",
            triggers=("e6", "good clinical practice", "gcp"),
            subcategory="ICH E6(R3) Good Clinical Practice",
            answer=(
                "ICH E6(R3) Good Clinical Practice provides comprehensive guidelines for clinical trials:\n\n"
                "**Key ICH E6(R3) Requirements:**\n"
                "• **Data Integrity** - Ensuring AI-generated data meets GCP standards\n"
                "• **Protocol Compliance** - AI systems must align with approved study protocols\n"
                "• **Quality Assurance** - Comprehensive QA programs for AI systems\n"
                "• **Documentation** - Detailed documentation of AI system development and validation\n"
                "• **Risk Management** - Risk assessment and mitigation for AI applications\n\n"
                "**Core GCP Principles:**\n"
                "• **Ethical Conduct** - Clinical trials must be conducted in accordance with ethical principles\n"
                "• **Scientific Rigor** - Trials must be scientifically sound and described in clear protocols\n"
                "• **Regulatory Compliance** - Trials must comply with applicable regulatory requirements\n"
                "• **Data Quality** - All clinical trial data must be accurate, complete, and verifiable\n"
                "• **Subject Protection** - Rights, safety, and well-being of trial subjects are paramount\n\n"
                "**AI-Specific Considerations:**\n"
                "• AI systems used in clinical trials must be validated and documented\n"
                "• Data generated by AI must meet the same quality standards as human-generated data\n"
                "• AI algorithms must be transparent and explainable\n"
                "• Risk management must address AI-specific risks and failures"
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="ICH E6(R3) Good Clinical Practice",
                    content="International guidelines for clinical trial conduct",
                    url=ICH_E6_URL,
                ),
                Source(
                    type=SourceType.GUIDANCE,
                    title="ICH E6(R3) Questions & Answers",
                    content="Frequently asked questions about GCP guidelines",
                    url=ICH_E6_URL,
                ),
            ),
            action_items=(
                "Review ICH E6(R3) for AI-specific GCP requirements",
                "Implement data integrity controls for AI systems",
                "Establish QA programs for AI applications",
                "Document AI system validation and performance",
                "Conduct risk assessments for AI in clinical trials",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.95,
        ),
        TopicBranch(
            id="ich-e8",
            triggers=("e8", "general considerations"),
            subcategory="ICH E8(R1) General Considerations",
            answer=(
                "ICH E8(R1) General Considerations for Clinical Studies provides guidance on clinical "
                "study design and conduct:\n\n"
                "**Key E8(R1) Principles:**\n"
                "• **Quality by Design** - Quality should be built into clinical studies from the beginning\n"
                "• **Patient Focus** - Studies should be designed with patient needs and safety in mind\n"
                "• **Risk-Based Approach** - Study design should be based on risk assessment\n"
                "• **Flexibility** - Study designs should be flexible to accommodate new technologies and methods\n"
                "• **Efficiency** - Studies should be designed to be as efficient as possible\n\n"
                "**AI Integration Considerations:**\n"
                "• AI can be used to optimize study design and patient selection\n"
                "• AI systems must be validated before use in clinical studies\n"
                "• Data quality requirements apply to AI-generated data\n"
                "• Risk management must address AI-specific risks\n"
                "• Study protocols must clearly define AI system use and limitations"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="ICH E8(R1) General Considerations for Clinical Studies",
                    content="Guidance on clinical study design and conduct",
                    url="https://www.ich.org/page/e8-r1-general-considerations-clinical-studies",
                ),
            ),
            action_items=(
                "Review E8(R1) for study design principles",
                "Implement quality by design approach",
                "Conduct risk-based study design",
                "Validate AI systems before study use",
                "Document AI system integration in study protocols",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
        TopicBranch(
            id="ich-e9",
            triggers=("e9", "statistical principles"),
            subcategory="ICH E9(R1) Statistical Principles",
            answer=(
                "ICH E9(R1) Statistical Principles for Clinical Trials provides guidance on statistical "
                "aspects of clinical trials:\n\n"
                "**Key E9(R1) Concepts:**\n"
                "• **Estimands** - Clear definition of what is being estimated in the trial\n"
                "• **Statistical Analysis Plan** - Detailed plan for statistical analysis\n"
                "• **Missing Data** - Strategies for handling missing data\n"
                "• **Intercurrent Events** - How to handle events that occur during the trial\n"
                "• **Sensitivity Analyses** - Additional analyses to assess robustness of results\n\n"
                "**AI and Machine Learning Considerations:**\n"
                "• AI models used for statistical analysis must be validated\n"
                "• Machine learning algorithms must be transparent and explainable\n"
                "• Data used for AI training must meet quality standards\n"
                "• AI-generated insights must be statistically sound\n"
                "• Risk management must address AI model failures and biases"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="ICH E9(R1) Statistical Principles for Clinical Trials",
                    content="Guidance on statistical aspects of clinical trials",
                    url="https://www.ich.org/page/e9-r1-statistical-principles-clinical-trials",
                ),
            ),
            action_items=(
                "Review E9(R1) for statistical analysis requirements",
                "Define clear estimands for your trial",
                "Develop comprehensive statistical analysis plan",
                "Validate AI models used for statistical analysis",
                "Implement sensitivity analyses for AI-generated results",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
        TopicBranch(
            id="ich-e17",
            triggers=("e17", "multi-regional", "mrct"),
            subcategory="ICH E17 Multi-Regional Clinical Trials",
            answer=(
                "ICH E17 Multi-Regional Clinical Trials provides guidance on conducting clinical trials "
                "across multiple regions:\n\n"
                "**Key E17 Principles:**\n"
                "• **Regional Considerations** - Account for regional differences in medical practice and regulations\n"
                "• **Ethnic Sensitivity** - Consider ethnic factors in study design and analysis\n"
                "• **Regulatory Harmonization** - Align with regional regulatory requirements\n"
                "• **Data Integration** - Ensure data quality and consistency across regions\n"
                "• **Risk Management** - Address regional-specific risks and challenges\n\n"
                "**AI Considerations for Multi-Regional Trials:**\n"
                "• AI systems must be validated across different regions and populations\n"
                "• Data quality standards must be consistent across all regions\n"
                "• AI algorithms must account for regional differences in medical practice\n"
                "• Risk management must address region-specific AI challenges\n"
                "• Regulatory compliance must be maintained across all regions"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="ICH E17 Multi-Regional Clinical Trials",
                    content="Guidance on multi-regional clinical trial conduct",
                    url="https://www.ich.org/page/e17-multi-regional-clinical-trials",
                ),
            ),
            action_items=(
                "Review E17 for multi-regional trial requirements",
                "Assess regional differences and requirements",
                "Validate AI systems across different regions",
                "Implement consistent data quality standards",
                "Develop region-specific risk management plans",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
        TopicBranch(
            id="ich-clinical-trials",
            triggers=("clinical trial", "clinical study"),
            subcategory="ICH Clinical Trials",
            answer=(
                "ICH provides comprehensive guidelines for clinical trials through multiple guidelines:\n\n"
                "**Key ICH Guidelines for Clinical Trials:**\n"
                "• **ICH E6(R3): Good Clinical Practice (GCP)** - International ethical and scientific quality standard\n"
                "• **ICH E8(R1): General Considerations for Clinical Studies** - Study design and conduct principles\n"
                "• **ICH E9(R1): Statistical Principles for Clinical Trials** - Statistical analysis guidance\n"
                "• **ICH E17: Multi-Regional Clinical Trials** - Cross-regional trial conduct\n"
                "• **ICH E3: Structure and Content of Clinical Study Reports** - Report formatting and content\n\n"
                "**Core Requirements:**\n"
                "• **Data Integrity** - Ensuring AI-generated data meets GCP standards\n"
                "• **Protocol Compliance** - AI systems must align with approved study protocols\n"
                "• **Quality Assurance** - Comprehensive QA programs for AI systems\n"
                "• **Documentation** - Detailed documentation of AI system development and validation\n"
                "• **Risk Management** - Risk assessment and mitigation for AI applications\n\n"
                "**AI Applications in Clinical Trials:**\n"
                "• Patient recruitment and screening\n"
                "• Protocol optimization and adaptive trial design\n"
                "• Data collection and monitoring\n"
                "• Safety signal detection\n"
                "• Statistical analysis and reporting"
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="ICH Guidelines",
                    content="Comprehensive ICH guidelines for clinical trials",
                    url="https://www.ich.org/page/efficacy-guidelines",
                ),
                Source(
                    type=SourceType.GUIDANCE,
                    title="ICH E6(R3) Good Clinical Practice",
                    content="GCP guidelines for clinical trial conduct",
                    url=ICH_E6_URL,
                ),
            ),
            action_items=(
                "Review relevant ICH guidelines for your clinical trial",
                "Implement data integrity controls for AI systems",
                "Establish QA programs for AI applications",
                "Document AI system validation and performance",
                "Conduct risk assessments for AI in clinical trials",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.95,
        ),
    )
