"""
Knowledge API Router
Read and correct cached item knowledge (category, storage, shelf life)
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, model_validator

from apps.api.dependencies import Pipeline, get_pipeline
from grocery.common.schemas.grocery import Category, KnowledgeRecord
from grocery.domain.categorization.normalizer import normalize

router = APIRouter()


class KnowledgeEdit(BaseModel):
    """User correction for one item"""
    category: Category
    storage_advice: Optional[str] = Field(None, description="e.g. 'Refrigerate in crisper drawer'")
    shelf_life_days_min: Optional[int] = Field(None, ge=0)
    shelf_life_days_max: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_range(self):
        low, high = self.shelf_life_days_min, self.shelf_life_days_max
        if low is not None and high is not None and low > high:
            raise ValueError("shelf_life_days_min must not exceed shelf_life_days_max")
        return self


@router.get("/{name}", response_model=KnowledgeRecord)
async def get_knowledge(name: str, pipeline: Pipeline = Depends(get_pipeline)):
    """Knowledge for an item name (normalized before lookup)"""
    record = pipeline.store.get(normalize(name))
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No knowledge for '{name}'"
        )
    return record


@router.put("/{name}", response_model=KnowledgeRecord)
async def put_knowledge(
    name: str,
    edit: KnowledgeEdit,
    pipeline: Pipeline = Depends(get_pipeline),
):
    """
    Record a user correction

    Overwrites whatever is cached for the name and updates live entries.
    """
    return await pipeline.orchestrator.record_user_knowledge(
        name,
        edit.category,
        storage_advice=edit.storage_advice,
        shelf_life_min=edit.shelf_life_days_min,
        shelf_life_max=edit.shelf_life_days_max,
    )
