from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from krishi_setu.collections.transaction import (
    delete_transaction,
    get_transactions_from_farmer_id,
    save_transaction,
)
from krishi_setu.core.security import get_current_farmer_id
from krishi_setu.models.transaction import (
    CATEGORIES_BY_TYPE,
    LedgerSummary,
    Transaction,
    TransactionCreate,
)
from krishi_setu.services.ledger_service import summarize_transactions

router = APIRouter(prefix="/ledger", tags=["Krishi Khata"])


@router.get("/categories", response_model=Dict[str, List[str]])
async def get_categories():
    """Allowed categories per transaction type."""
    return {
        transaction_type.value: list(categories)
        for transaction_type, categories in CATEGORIES_BY_TYPE.items()
    }


@router.get(
    "/transactions",
    response_model=List[Transaction],
    response_model_exclude_none=True,
)
async def get_transactions(farmer_id: str = Depends(get_current_farmer_id)):
    """
    Transaction history of the current farmer, most recent first.
    """
    return await get_transactions_from_farmer_id(farmer_id)


@router.post(
    "/transactions",
    response_model=Transaction,
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
)
async def add_transaction(
    entry: TransactionCreate, farmer_id: str = Depends(get_current_farmer_id)
):
    transaction = Transaction(farmer_id=farmer_id, **entry.model_dump())
    return await save_transaction(transaction)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_transaction(
    transaction_id: str, farmer_id: str = Depends(get_current_farmer_id)
):
    if not await delete_transaction(transaction_id, farmer_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Transaction with ID '{transaction_id}' not found.",
        )
    return


@router.get("/summary", response_model=LedgerSummary)
async def get_summary(farmer_id: str = Depends(get_current_farmer_id)):
    """
    Total income, total expenses and the resulting profit or loss.
    """
    return summarize_transactions(await get_transactions_from_farmer_id(farmer_id))
