import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo.errors import PyMongoError

from krishi_setu.collections.cultivation_guide import (
    delete_cultivation_guide,
    get_cultivation_guide_from_id,
    get_cultivation_guides_from_farmer_id,
    replace_cultivation_guide_stages,
)
from krishi_setu.core.security import get_current_farmer_id, get_current_language, verify_jwt
from krishi_setu.models.cultivation_guide import (
    CultivationGuide,
    CultivationGuideRequest,
    CultivationGuideView,
    TaskToggleRequest,
)
from krishi_setu.services.cultivation_guide_service import (
    build_guide_view,
    generate_cultivation_guide,
    suggested_varieties,
)
from krishi_setu.services.stage_lifecycle import (
    MultipleActiveStagesError,
    StageNotActiveError,
    StageProgress,
    TaskIndexError,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/cultivation-guides",
    tags=["Cultivation Guide"],
    dependencies=[Depends(verify_jwt)],
)


async def _load_progress(guide_id: str, farmer_id: str):
    guide = await get_cultivation_guide_from_id(guide_id, farmer_id)
    if not guide:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cultivation guide not found.",
        )
    try:
        return guide, StageProgress(guide.stages)
    except MultipleActiveStagesError as e:
        logger.warning("Guide %s has inconsistent stages: %s", guide_id, e)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


async def _persist(guide: CultivationGuide, progress: StageProgress) -> CultivationGuideView:
    try:
        updated = await replace_cultivation_guide_stages(
            guide.id, guide.farmer_id, progress.stages
        )
    except PyMongoError:
        logger.exception("Could not update stages of guide %s", guide.id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not update the guide. Please try again.",
        )
    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cultivation guide not found.",
        )
    return build_guide_view(guide, progress)


@router.post(
    "/",
    response_model=CultivationGuide,
    status_code=status.HTTP_201_CREATED,
    summary="Generate a new cultivation guide",
    response_model_exclude_none=True,
)
async def create_guide(
    request: CultivationGuideRequest,
    farmer_id: str = Depends(get_current_farmer_id),
    language: str = Depends(get_current_language),
):
    """
    Generate a stage-by-stage cultivation guide with AI and save it for the farmer.
    The first stage starts active.
    """
    return await generate_cultivation_guide(
        farmer_id=farmer_id,
        request=request,
        language=language,
    )


@router.get(
    "/",
    response_model=List[CultivationGuide],
    summary="List the farmer's cultivation guides",
    response_model_exclude_none=True,
)
async def list_guides(farmer_id: str = Depends(get_current_farmer_id)):
    return await get_cultivation_guides_from_farmer_id(farmer_id)


@router.get("/varieties", response_model=List[str], summary="Suggested varieties for a crop")
async def get_varieties(crop: str = Query(..., min_length=1)):
    return suggested_varieties(crop)


@router.get(
    "/{guide_id}",
    response_model=CultivationGuideView,
    summary="Get a cultivation guide with its progress",
    response_model_exclude_none=True,
)
async def get_guide(guide_id: str, farmer_id: str = Depends(get_current_farmer_id)):
    guide, progress = await _load_progress(guide_id, farmer_id)
    return build_guide_view(guide, progress)


@router.patch(
    "/{guide_id}/stages/{stage_index}/tasks/{task_index}",
    response_model=CultivationGuideView,
    summary="Check or uncheck a task of the active stage",
    response_model_exclude_none=True,
)
async def toggle_guide_task(
    guide_id: str,
    stage_index: int,
    task_index: int,
    toggle: TaskToggleRequest,
    farmer_id: str = Depends(get_current_farmer_id),
):
    guide, progress = await _load_progress(guide_id, farmer_id)
    try:
        progress = progress.toggle_task(stage_index, task_index, toggle.completed)
    except TaskIndexError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StageNotActiveError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return await _persist(guide, progress)


@router.post(
    "/{guide_id}/advance",
    response_model=CultivationGuideView,
    summary="Complete the active stage and start the next one",
    response_model_exclude_none=True,
)
async def advance_guide(guide_id: str, farmer_id: str = Depends(get_current_farmer_id)):
    """
    Completes the active stage, checking off any unchecked tasks, and activates
    the following stage. Does nothing once every stage is completed.
    """
    guide, progress = await _load_progress(guide_id, farmer_id)
    advanced = progress.advance()
    if advanced is progress:
        return build_guide_view(guide, progress)
    return await _persist(guide, advanced)


@router.delete(
    "/{guide_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a cultivation guide",
)
async def delete_guide(guide_id: str, farmer_id: str = Depends(get_current_farmer_id)):
    if not await delete_cultivation_guide(guide_id, farmer_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cultivation guide not found.",
        )
    return
