from typing import List

from motor.motor_asyncio import AsyncIOMotorCollection

from krishi_setu.core.mongodb import get_cultivation_guide_collection
from krishi_setu.models.cultivation_guide import CultivationGuide, Stage


async def get_cultivation_guide_from_id(
    guide_id: str,
    farmer_id: str,
) -> CultivationGuide:
    try:
        collection: AsyncIOMotorCollection = get_cultivation_guide_collection()
        response = await collection.find_one({"_id": guide_id, "farmer_id": farmer_id})
        return CultivationGuide.model_validate(response) if response else None
    except Exception as e:
        raise e


async def get_cultivation_guides_from_farmer_id(
    farmer_id: str,
) -> list[CultivationGuide]:
    try:
        collection: AsyncIOMotorCollection = get_cultivation_guide_collection()
        items = collection.find({"farmer_id": farmer_id}).sort("created_at", -1)
        return [CultivationGuide.model_validate(item) async for item in items]
    except Exception as e:
        raise e


async def save_cultivation_guide(
    cultivation_guide: CultivationGuide,
) -> CultivationGuide:
    try:
        collection: AsyncIOMotorCollection = get_cultivation_guide_collection()
        payload = cultivation_guide.model_dump(mode="json", exclude_none=True, by_alias=True)
        await collection.replace_one({"_id": cultivation_guide.id}, payload, upsert=True)
        response = await collection.find_one({"_id": cultivation_guide.id})
        return CultivationGuide.model_validate(response)
    except Exception as e:
        raise e


async def replace_cultivation_guide_stages(
    guide_id: str,
    farmer_id: str,
    stages: List[Stage],
) -> bool:
    """Overwrite the whole ``stages`` array of a guide. Last writer wins."""
    try:
        collection: AsyncIOMotorCollection = get_cultivation_guide_collection()
        payload = [stage.model_dump(mode="json", exclude_none=True) for stage in stages]
        result = await collection.update_one(
            {"_id": guide_id, "farmer_id": farmer_id}, {"$set": {"stages": payload}}
        )
        return result.matched_count > 0
    except Exception as e:
        raise e


async def delete_cultivation_guide(guide_id: str, farmer_id: str) -> bool:
    try:
        collection: AsyncIOMotorCollection = get_cultivation_guide_collection()
        result = await collection.delete_one({"_id": guide_id, "farmer_id": farmer_id})
        return result.deleted_count > 0
    except Exception as e:
        raise e


async def delete_cultivation_guides_from_farmer_id(farmer_id: str) -> bool:
    try:
        collection: AsyncIOMotorCollection = get_cultivation_guide_collection()
        await collection.delete_many({"farmer_id": farmer_id})
        return True
    except Exception as e:
        raise e
