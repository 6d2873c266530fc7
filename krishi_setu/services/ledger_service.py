from typing import Iterable

from krishi_setu.models.transaction import LedgerSummary, Transaction, TransactionType


def summarize_transactions(transactions: Iterable[Transaction]) -> LedgerSummary:
    total_income = 0.0
    total_expenses = 0.0
    count = 0
    for transaction in transactions:
        count += 1
        if transaction.type == TransactionType.INCOME:
            total_income += transaction.amount
        else:
            total_expenses += transaction.amount

    profit_loss = total_income - total_expenses
    return LedgerSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        profit_loss=profit_loss,
        is_profit=profit_loss >= 0,
        transaction_count=count,
    )
