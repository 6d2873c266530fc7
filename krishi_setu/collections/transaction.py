from motor.motor_asyncio import AsyncIOMotorCollection

from krishi_setu.core.mongodb import get_transaction_collection
from krishi_setu.models.transaction import Transaction


async def get_transactions_from_farmer_id(farmer_id: str) -> list[Transaction]:
    transaction_collection: AsyncIOMotorCollection = get_transaction_collection()
    try:
        items = transaction_collection.find({"farmer_id": farmer_id}).sort(
            [("date", -1), ("created_at", -1)]
        )
        return [Transaction.model_validate(item) async for item in items]
    except Exception:
        raise


async def save_transaction(transaction: Transaction) -> Transaction:
    transaction_collection: AsyncIOMotorCollection = get_transaction_collection()
    try:
        payload = transaction.model_dump(mode="json", exclude_none=True, by_alias=True)
        await transaction_collection.replace_one({"_id": transaction.id}, payload, upsert=True)
        response = await transaction_collection.find_one({"_id": transaction.id})
        return Transaction.model_validate(response)
    except Exception:
        raise


async def delete_transaction(transaction_id: str, farmer_id: str) -> bool:
    transaction_collection: AsyncIOMotorCollection = get_transaction_collection()
    try:
        result = await transaction_collection.delete_one(
            {"_id": transaction_id, "farmer_id": farmer_id}
        )
        return result.deleted_count > 0
    except Exception:
        raise


async def delete_transactions_from_farmer_id(farmer_id: str) -> bool:
    transaction_collection: AsyncIOMotorCollection = get_transaction_collection()
    try:
        await transaction_collection.delete_many({"farmer_id": farmer_id})
        return True
    except Exception:
        raise
