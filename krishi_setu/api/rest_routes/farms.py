from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from krishi_setu.collections.farm import (
    delete_farm,
    get_farm_from_id,
    get_farms_from_farmer_id,
    save_farm,
)
from krishi_setu.core.security import get_current_farmer_id
from krishi_setu.models.farm import Farm, FarmRegistration, largest_farm

router = APIRouter(prefix="/farms", tags=["Farms"])


def _farm_not_found(farm_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Farm with ID '{farm_id}' not found.",
    )


@router.post(
    "/",
    response_model=Farm,
    status_code=status.HTTP_201_CREATED,
    summary="Register a farm",
    response_model_exclude_none=True,
)
async def register_farm(
    registration: FarmRegistration, farmer_id: str = Depends(get_current_farmer_id)
):
    """
    Register a new farm for the current farmer.
    """
    farm = Farm(farmer_id=farmer_id, **registration.model_dump())
    return await save_farm(farm)


@router.get(
    "/",
    response_model=List[Farm],
    summary="Get all farms of the current farmer",
    response_model_exclude_none=True,
)
async def get_farms(farmer_id: str = Depends(get_current_farmer_id)):
    """
    Returns an empty list if the farmer has no registered farms.
    """
    return await get_farms_from_farmer_id(farmer_id)


@router.get(
    "/largest",
    response_model=Farm,
    summary="Get the farmer's largest farm",
    response_model_exclude_none=True,
)
async def get_largest_farm(farmer_id: str = Depends(get_current_farmer_id)):
    farm = largest_farm(await get_farms_from_farmer_id(farmer_id))
    if not farm:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No farm registered yet.",
        )
    return farm


@router.get(
    "/{farm_id}",
    response_model=Farm,
    summary="Get a farm by its ID",
    response_model_exclude_none=True,
)
async def get_farm_by_id(farm_id: str, farmer_id: str = Depends(get_current_farmer_id)):
    farm = await get_farm_from_id(farm_id, farmer_id)
    if not farm:
        raise _farm_not_found(farm_id)
    return farm


@router.put(
    "/{farm_id}",
    response_model=Farm,
    summary="Update a registered farm",
    response_model_exclude_none=True,
)
async def update_farm(
    farm_id: str,
    registration: FarmRegistration,
    farmer_id: str = Depends(get_current_farmer_id),
):
    """
    Replace the details of an existing farm. The farm keeps its ID and owner.
    """
    existing = await get_farm_from_id(farm_id, farmer_id)
    if not existing:
        raise _farm_not_found(farm_id)
    farm = Farm(id=existing.id, farmer_id=farmer_id, **registration.model_dump())
    return await save_farm(farm)


@router.delete(
    "/{farm_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a farm",
)
async def delete_farm_by_id(farm_id: str, farmer_id: str = Depends(get_current_farmer_id)):
    if not await delete_farm(farm_id, farmer_id):
        raise _farm_not_found(farm_id)
    return
