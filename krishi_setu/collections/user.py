from typing import Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from krishi_setu.core.mongodb import get_user_collection
from krishi_setu.models.user import ProfileUpdate, User


def _to_user(document: Optional[dict]) -> Optional[User]:
    return User.model_validate(document) if document else None


async def get_user_from_id(farmer_id: str) -> Optional[User]:
    collection: AsyncIOMotorCollection = get_user_collection()
    return _to_user(await collection.find_one({"_id": farmer_id}))


async def get_user_from_phone(phone: str) -> Optional[User]:
    collection: AsyncIOMotorCollection = get_user_collection()
    return _to_user(await collection.find_one({"phone": phone.strip()}))


async def save_user(user: User) -> User:
    try:
        collection: AsyncIOMotorCollection = get_user_collection()
        payload = user.model_dump(mode="json", exclude_none=True, by_alias=True)
        await collection.replace_one({"_id": user.id}, payload, upsert=True)
        return _to_user(await collection.find_one({"_id": user.id}))
    except Exception as e:
        raise e


async def mark_user_verified(farmer_id: str) -> Optional[User]:
    collection: AsyncIOMotorCollection = get_user_collection()
    document = await collection.find_one_and_update(
        {"_id": farmer_id},
        {"$set": {"is_verified": True}},
        return_document=ReturnDocument.AFTER,
    )
    return _to_user(document)


async def update_user_profile(farmer_id: str, update: ProfileUpdate) -> Optional[User]:
    """Apply the non-empty profile fields. Returns None if the user is gone."""
    changes = update.model_dump(exclude_none=True)
    collection: AsyncIOMotorCollection = get_user_collection()
    if not changes:
        return await get_user_from_id(farmer_id)
    document = await collection.find_one_and_update(
        {"_id": farmer_id},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    return _to_user(document)


async def delete_user(farmer_id: str) -> bool:
    collection: AsyncIOMotorCollection = get_user_collection()
    result = await collection.delete_one({"_id": farmer_id})
    return result.deleted_count > 0
