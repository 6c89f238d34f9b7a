"""
AskRexi Controllers (API Routes)
================================

FastAPI routes for the question endpoint.

Controllers are thin - they delegate to the Router held in app state.
"""

from fastapi import APIRouter, Depends, Request

from askrexi.agents.application import (
    AgentResponseDTO, AgentRouter, AskRequest, AskResponse,
    CapabilitiesResponse, CapabilityDTO
)
from askrexi.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/askrexi", tags=["AskRexi"])


# ========== Example payloads for Swagger ==========

ASK_REQUEST_EXAMPLE = {
    "question": "What are the FDA guidelines for AI in drug development?",
    "context": {
        "therapeutic_area": "oncology",
        "preferences": {"expertise_level": "beginner"},
    },
}

ASK_RESPONSE_EXAMPLE = {
    "success": True,
    "data": {
        "answer": "The FDA's AI/ML Action Plan outlines a comprehensive approach ...",
        "category": "regulatory",
        "subcategory": "FDA AI/ML Action Plan",
        "sources": [
            {
                "type": "regulation",
                "title": "FDA AI/ML-Based Software as Medical Device Action Plan",
                "content": "Comprehensive framework for AI/ML regulation in medical devices",
                "url": "https://www.fda.gov/medical-devices/software-medical-device-samd/"
                       "artificial-intelligence-and-machine-learning-software-medical-device",
            }
        ],
        "action_items": ["Implement Good Machine Learning Practices (GMLP)"],
        "impact_level": "high",
        "related_questions": ["What are the FDA requirements for AI validation?"],
        "confidence": 1.0,
        "agent_used": "regulatory",
        "sub_agent_used": "fda",
    },
}


# ========== Dependencies ==========

def get_agent_router(request: Request) -> AgentRouter:
    """Router built at startup."""
    return request.app.state.router


# ========== Route Handlers ==========

@router.post(
    "",
    response_model=AskResponse,
    summary="Ask a compliance question",
    description="""
    Route a free-text question to the regulatory, assessment, analytics or
    general compliance domain and return a structured answer.

    **Empty questions** are answered with a clarifying response, never rejected.

    **Personalization**: `context.preferences.expertise_level` (`beginner`,
    `intermediate`, `expert`) and `context.therapeutic_area` adjust the answer text.

    **Confidence**: 0.5 base, +0.2 for a non-general category, +0.1 for high or
    critical impact, +0.1 with sources, +0.1 with action items, capped at 1.0.
    Fallback answers after an internal fault are fixed at 0.5.
    """,
    responses={
        200: {
            "description": "Question answered",
            "content": {
                "application/json": {
                    "example": ASK_RESPONSE_EXAMPLE
                }
            }
        }
    }
)
async def ask(
    request: AskRequest,
    agent_router: AgentRouter = Depends(get_agent_router)
):
    context = request.context.to_domain() if request.context is not None else None
    response = await agent_router.route(request.question, context)

    return AskResponse(success=True, data=AgentResponseDTO.from_entity(response))


@router.get(
    "/capabilities",
    response_model=CapabilitiesResponse,
    summary="List domain capabilities",
    description="Static capability descriptors of every domain handler and its topic specialists."
)
async def get_capabilities(agent_router: AgentRouter = Depends(get_agent_router)):
    return CapabilitiesResponse(
        success=True,
        data=[
            CapabilityDTO.from_capability(
                handler.get_capabilities(),
                [specialist.capability for specialist in handler.specialists],
            )
            for handler in agent_router.handlers
        ],
    )


askrexi_router = router
