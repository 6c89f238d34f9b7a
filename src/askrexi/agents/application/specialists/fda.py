"""
FDA Specialist
==============

US Food and Drug Administration guidance on AI/ML in medical products.
"""

from askrexi.config import ImpactLevel, SourceType
from askrexi.agents.domain import DomainCapability, Source, TopicBranch
from askrexi.agents.domain.composer import FDA_AI_ML_URL, FDA_GMLP_URL
from askrexi.agents.application.specialists.base import TopicSpecialist


class FDASpecialist(TopicSpecialist):
    """FDA AI/ML Action Plan, GMLP, SaMD, 21 CFR Part 11 and CDS."""

    name = "fda"
    authority_terms = ("fda", "food and drug administration")

    capability = DomainCapability(
        domain="fda",
        subdomains=("AI/ML Guidelines", "SaMD Framework", "Clinical Trials", "Drug Development", "Quality Systems"),
        keywords=(
            "fda", "food and drug administration", "ai/ml action plan", "gmlp", "good machine learning practice",
            "samd", "software as medical device", "clinical decision support", "cds", "21 cfr part 11",
            "electronic records", "electronic signatures", "validation", "verification", "risk management",
            "quality system regulation", "qsr", "design controls", "human factors", "usability",
            "premarket approval", "pma", "510k", "de novo", "breakthrough therapy", "fast track",
            "orphan drug", "biosimilar", "generic", "new drug application", "nda",
            "investigational new drug", "ind", "biologics license application", "bla",
            "adverse event reporting", "medwatch", "postmarket surveillance", "recall",
            "inspection", "483", "warning letter", "enforcement action",
        ),
        expertise=(
            "FDA AI/ML Action Plan",
            "Good Machine Learning Practice",
            "Software as Medical Device",
            "Clinical Decision Support",
            "Electronic Records and Signatures",
            "Quality System Regulation",
            "Premarket Submissions",
            "Postmarket Surveillance",
        ),
    )

    branches = (
        TopicBranch(
            id="fda-ai-ml-action-plan",
            triggers=(
                "ai/ml action plan", "action plan",
                "guidelines for ai", "guidance for ai", "guidance on ai", "ai guidelines",
            ),
            subcategory="FDA AI/ML Action Plan",
            answer=(
                "The FDA AI/ML Action Plan (2021) provides a comprehensive framework for regulating "
                "AI/ML in medical devices:\n\n"
                "**Key Components:**\n"
                "• **Good Machine Learning Practice (GMLP)** - Best practices for AI/ML development\n"
                "• **Predetermined Change Control Plans** - Framework for managing AI model updates\n"
                "• **Real-World Performance Monitoring** - Continuous monitoring of AI performance\n"
                "• **Algorithm Transparency** - Requirements for explainable AI systems\n"
                "• **Clinical Validation** - Rigorous testing in real-world clinical settings\n\n"
                "**Core Requirements:**\n"
                "• Establish AI/ML development lifecycle management\n"
                "• Implement continuous learning protocols\n"
                "• Maintain comprehensive documentation\n"
                "• Conduct bias and fairness assessments\n"
                "• Ensure clinical validation and monitoring\n\n"
                "**Impact on Pharmaceutical AI:**\n"
                "• AI models used in drug discovery must meet FDA validation standards\n"
                "• Clinical trial AI tools require appropriate regulatory pathway\n"
                "• Real-world evidence from AI systems can support regulatory submissions"
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="FDA AI/ML Action Plan",
                    content="Official FDA guidance on AI/ML in medical devices",
                    url=FDA_AI_ML_URL,
                ),
                Source(
                    type=SourceType.GUIDANCE,
                    title="Good Machine Learning Practice",
                    content="GMLP guidelines for AI/ML development",
                    url=FDA_GMLP_URL,
                ),
            ),
            action_items=(
                "Review FDA AI/ML Action Plan for your specific use case",
                "Implement GMLP principles in your AI development process",
                "Develop predetermined change control plans",
                "Establish real-world performance monitoring protocols",
                "Conduct clinical validation studies for AI models",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.95,
        ),
        TopicBranch(
            id="fda-gmlp",
            triggers=("gmlp", "good machine learning practice"),
            subcategory="Good Machine Learning Practice",
            answer=(
                "Good Machine Learning Practice (GMLP) provides best practices for AI/ML development "
                "in medical devices:\n\n"
                "**Core GMLP Principles:**\n"
                "• **Multi-Disciplinary Expertise** - Include clinical, statistical, and software engineering expertise\n"
                "• **Good Software Engineering Practices** - Follow established software development standards\n"
                "• **Clinical Study Participants and Data** - Ensure representative and high-quality data\n"
                "• **Training Data** - Use diverse, representative datasets with proper validation\n"
                "• **Reference Datasets** - Establish benchmark datasets for performance evaluation\n"
                "• **Model Design** - Design for intended use with appropriate complexity\n"
                "• **Robustness** - Ensure model performance across different populations and conditions\n\n"
                "**Implementation Requirements:**\n"
                "• Establish AI/ML development lifecycle management\n"
                "• Implement comprehensive testing and validation protocols\n"
                "• Maintain detailed documentation of model development\n"
                "• Conduct bias and fairness assessments\n"
                "• Ensure clinical validation and real-world performance monitoring"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="Good Machine Learning Practice for Medical Device Development",
                    content="Official FDA GMLP guidance document",
                    url=FDA_GMLP_URL,
                ),
            ),
            action_items=(
                "Implement GMLP principles in your AI development process",
                "Establish multi-disciplinary development teams",
                "Develop comprehensive testing and validation protocols",
                "Create detailed model documentation",
                "Implement bias and fairness assessment procedures",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.95,
        ),
        TopicBranch(
            id="fda-samd",
            triggers=("samd", "software as medical device", "software as a medical device"),
            subcategory="Software as Medical Device",
            answer=(
                "Software as Medical Device (SaMD) refers to software intended for medical purposes that "
                "performs these purposes without being part of a hardware medical device:\n\n"
                "**SaMD Classification:**\n"
                "• **Class I** - Low risk, general controls\n"
                "• **Class II** - Moderate risk, special controls\n"
                "• **Class III** - High risk, premarket approval\n\n"
                "**Key Requirements:**\n"
                "• **Risk Management** - Comprehensive risk assessment and mitigation\n"
                "• **Quality Management System** - QMS compliance (21 CFR 820)\n"
                "• **Clinical Evaluation** - Evidence of safety and effectiveness\n"
                "• **Cybersecurity** - Protection against security threats\n"
                "• **Human Factors** - Usability and user interface design\n"
                "• **Labeling** - Clear instructions for use and limitations\n\n"
                "**Regulatory Pathways:**\n"
                "• **510(k) Clearance** - Substantial equivalence to predicate device\n"
                "• **De Novo Classification** - Novel device with no predicate\n"
                "• **Premarket Approval (PMA)** - High-risk devices requiring clinical data"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="Software as Medical Device (SaMD)",
                    content="FDA guidance on SaMD regulation",
                    url="https://www.fda.gov/medical-devices/software-medical-device-samd",
                ),
            ),
            action_items=(
                "Determine SaMD classification for your software",
                "Develop risk management plan",
                "Implement quality management system",
                "Conduct clinical evaluation",
                "Prepare appropriate regulatory submission",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
        TopicBranch(
            id="fda-part-11",
            triggers=("21 cfr part 11", "part 11", "electronic records"),
            subcategory="21 CFR Part 11",
            answer=(
                "21 CFR Part 11 establishes criteria for electronic records and electronic signatures "
                "that are equivalent to paper records and handwritten signatures:\n\n"
                "**Key Requirements:**\n"
                "• **Electronic Records** - Must be trustworthy, reliable, and equivalent to paper records\n"
                "• **Electronic Signatures** - Must be legally binding and equivalent to handwritten signatures\n"
                "• **Access Controls** - User identification and authentication\n"
                "• **Audit Trails** - Complete record of system access and changes\n"
                "• **System Validation** - Comprehensive validation of electronic systems\n"
                "• **Documentation** - Detailed system documentation and procedures\n\n"
                "**Compliance Requirements:**\n"
                "• Implement user access controls and authentication\n"
                "• Maintain comprehensive audit trails\n"
                "• Validate all electronic systems\n"
                "• Establish data integrity controls\n"
                "• Document all procedures and processes\n"
                "• Train personnel on Part 11 requirements"
            ),
            sources=(
                Source(
                    type=SourceType.REGULATION,
                    title="21 CFR Part 11 - Electronic Records and Electronic Signatures",
                    content="FDA regulation on electronic records and signatures",
                    url="https://www.accessdata.fda.gov/scripts/cdrh/cfdocs/cfcfr/CFRSearch.cfm?CFRPart=11",
                ),
            ),
            action_items=(
                "Conduct Part 11 compliance assessment",
                "Implement access controls and authentication",
                "Establish audit trail systems",
                "Validate all electronic systems",
                "Develop Part 11 compliance procedures",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
        TopicBranch(
            id="fda-cds",
            triggers=("clinical decision support", "cds"),
            subcategory="Clinical Decision Support",
            answer=(
                "FDA regulates Clinical Decision Support (CDS) software based on its intended use and risk level:\n\n"
                "**CDS Classification:**\n"
                "• **Non-Device CDS** - Software that provides general information without specific patient recommendations\n"
                "• **Device CDS** - Software that provides specific patient recommendations and may be regulated as a medical device\n\n"
                "**Key Factors for Device Classification:**\n"
                "• **Intended Use** - Whether software provides specific patient recommendations\n"
                "• **Risk Level** - Potential for patient harm if software fails\n"
                "• **Clinical Impact** - Whether software influences clinical decision-making\n"
                "• **User Expertise** - Level of clinical expertise required to use the software\n\n"
                "**Regulatory Requirements for Device CDS:**\n"
                "• Appropriate regulatory pathway (510(k), De Novo, or PMA)\n"
                "• Clinical validation and performance testing\n"
                "• Risk management and quality systems\n"
                "• Labeling and instructions for use\n"
                "• Postmarket surveillance and reporting"
            ),
            sources=(
                Source(
                    type=SourceType.GUIDANCE,
                    title="Clinical Decision Support Software",
                    content="FDA guidance on CDS software regulation",
                    url="https://www.fda.gov/regulatory-information/search-fda-guidance-documents/clinical-decision-support-software",
                ),
            ),
            action_items=(
                "Determine if your CDS software is a medical device",
                "Assess risk level and appropriate regulatory pathway",
                "Conduct clinical validation studies",
                "Implement risk management and quality systems",
                "Prepare appropriate regulatory submission",
            ),
            impact_level=ImpactLevel.HIGH,
            confidence=0.9,
        ),
    )
