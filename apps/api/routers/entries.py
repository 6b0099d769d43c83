"""
Entries API Router
Listing, aisle grouping and removal of grocery entries
"""
from typing import List
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status

from apps.api.dependencies import Pipeline, get_pipeline
from grocery.common.schemas.grocery import AisleGroup, GroceryEntry

logger = structlog.get_logger()
router = APIRouter()


@router.get("", response_model=List[GroceryEntry])
async def list_entries(pipeline: Pipeline = Depends(get_pipeline)):
    """All entries in the order they were added"""
    return pipeline.grocery_list.entries()


@router.get("/aisles", response_model=List[AisleGroup])
async def list_entries_by_aisle(pipeline: Pipeline = Depends(get_pipeline)):
    """Entries grouped by store aisle, in store walk order"""
    return pipeline.grocery_list.grouped()


@router.get("/{entry_id}", response_model=GroceryEntry)
async def get_entry(entry_id: UUID, pipeline: Pipeline = Depends(get_pipeline)):
    entry = pipeline.grocery_list.get(entry_id)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entry {entry_id} not found"
        )
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: UUID, pipeline: Pipeline = Depends(get_pipeline)):
    """Remove an entry (pending enrichment for it is discarded when it lands)"""
    removed = await pipeline.orchestrator.remove_entry(entry_id)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entry {entry_id} not found"
        )

    logger.info("entry_removed", entry_id=str(entry_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
