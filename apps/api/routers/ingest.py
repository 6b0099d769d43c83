"""
Ingest API Router
Turns raw user text (typed, dictated, pasted) into grocery entries
"""
from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from apps.api.dependencies import Pipeline, get_pipeline
from grocery.common.errors import EmptyInput
from grocery.common.schemas.grocery import GroceryEntry

logger = structlog.get_logger()
router = APIRouter()


class IngestRequest(BaseModel):
    text: str = Field(..., description="Raw user text, e.g. 'milk, eggs, 2 lbs ground beef'")


class IngestResponse(BaseModel):
    entries: List[GroceryEntry]
    enrichment_scheduled: int = Field(0, description="Background storage lookups started")


@router.post("", response_model=IngestResponse, status_code=status.HTTP_201_CREATED)
async def ingest_text(
    request: IngestRequest,
    pipeline: Pipeline = Depends(get_pipeline),
):
    """
    Ingest raw text

    - **text**: one or more grocery items

    Entries come back immediately; storage advice for unknown items is
    filled in by background enrichment and visible via GET /entries.
    """
    try:
        result = await pipeline.orchestrator.ingest(request.text)
    except EmptyInput as e:
        logger.info("ingest_rejected", reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Input text is empty"
        )

    return IngestResponse(
        entries=result.entries,
        enrichment_scheduled=len(result.enrichment_tasks),
    )
