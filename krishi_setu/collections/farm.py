from motor.motor_asyncio import AsyncIOMotorCollection

from krishi_setu.core.mongodb import get_farm_collection
from krishi_setu.models.farm import Farm


async def get_farm_from_id(farm_id: str, farmer_id: str) -> Farm:
    farm_collection: AsyncIOMotorCollection = get_farm_collection()
    try:
        response = await farm_collection.find_one({"_id": farm_id, "farmer_id": farmer_id})
        return Farm.model_validate(response) if response else None
    except Exception:
        raise


async def get_farms_from_farmer_id(farmer_id: str) -> list[Farm]:
    farm_collection: AsyncIOMotorCollection = get_farm_collection()
    try:
        items = farm_collection.find({"farmer_id": farmer_id})
        return [Farm.model_validate(item) async for item in items]
    except Exception:
        raise


async def save_farm(farm: Farm) -> Farm:
    farm_collection: AsyncIOMotorCollection = get_farm_collection()
    try:
        payload = farm.model_dump(mode="json", exclude_none=True, by_alias=True)
        await farm_collection.replace_one({"_id": farm.id}, payload, upsert=True)
        response = await farm_collection.find_one({"_id": farm.id})
        return Farm.model_validate(response)
    except Exception:
        raise


async def delete_farm(farm_id: str, farmer_id: str) -> bool:
    farm_collection: AsyncIOMotorCollection = get_farm_collection()
    try:
        result = await farm_collection.delete_one({"_id": farm_id, "farmer_id": farmer_id})
        return result.deleted_count > 0
    except Exception:
        raise


async def delete_farms_from_farmer_id(farmer_id: str) -> bool:
    farm_collection: AsyncIOMotorCollection = get_farm_collection()
    try:
        await farm_collection.delete_many({"farmer_id": farmer_id})
        return True
    except Exception:
        raise
