"""
AI router – "write with AI" for profile sections.
Answers from the similarity cache when possible, otherwise from Bedrock.
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from app.schemas.ai import ErrorResponse, WriteWithAiRequest, WriteWithAiResponse
from app.services.profile_writer import GenerationError, write_with_ai

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post(
    "/write-with-ai",
    response_model=WriteWithAiResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": WriteWithAiResponse, "description": "Served from cache"},
        502: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Write profile text, reusing cached answers to similar prompts",
)
def write_with_ai_endpoint(body: WriteWithAiRequest, response: Response):
    logger.info(
        "POST /ai/write-with-ai  type=%s  prompt_len=%d  role=%s",
        body.type.value,
        len(body.prompt),
        body.role,
    )

    try:
        result = write_with_ai(body.prompt, body.type, body.role)

    except GenerationError as exc:
        logger.error("Write-with-AI generation failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    except Exception as exc:
        logger.exception("Write-with-AI failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    if result.cached:
        response.status_code = status.HTTP_200_OK
        return WriteWithAiResponse(
            message="Response retrieved from similar cache",
            answer=result.answer,
            cached=True,
            similarity=result.similarity,
        )

    return WriteWithAiResponse(
        message="AI response generated and saved successfully",
        answer=result.answer,
        cached=False,
    )
