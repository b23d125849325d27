"""
Transaction Repository - Data Access Layer for escrow transactions
"""
from typing import List, Optional

from agrimarket.domain.transaction import Transaction, TransactionStatus
from agrimarket.repositories.base import BaseRepository

TRANSACTION_COLUMNS = """
    id, product_id, product_name, quantity, unit, amount,
    buyer_wallet, seller_wallet, escrow_account, escrow_signature,
    date, status, verified
"""


class TransactionRepository(BaseRepository):
    """Repository for Transaction data access"""

    @staticmethod
    def _map_row_to_transaction(row: dict) -> Transaction:
        return Transaction(
            id=row['id'],
            product_id=row['product_id'],
            product_name=row['product_name'],
            quantity=row['quantity'],
            unit=row['unit'],
            amount=row['amount'],
            buyer_wallet=row['buyer_wallet'],
            seller_wallet=row['seller_wallet'],
            escrow_account=row.get('escrow_account'),
            escrow_signature=row.get('escrow_signature'),
            date=row['date'],
            status=row['status'],
            verified=row['verified'],
        )

    def find_by_seller_wallet(self, wallet: str) -> List[Transaction]:
        """Sales received by a supplier wallet"""
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {TRANSACTION_COLUMNS}
                FROM transactions
                WHERE seller_wallet = %s
                ORDER BY date DESC
            """, (wallet,))
            return [self._map_row_to_transaction(row) for row in cursor.fetchall()]

    def find_by_buyer_wallet(self, wallet: str) -> List[Transaction]:
        """Purchases made by a buyer wallet"""
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {TRANSACTION_COLUMNS}
                FROM transactions
                WHERE buyer_wallet = %s
                ORDER BY date DESC
            """, (wallet,))
            return [self._map_row_to_transaction(row) for row in cursor.fetchall()]

    def find_by_id(self, transaction_id: str) -> Optional[Transaction]:
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {TRANSACTION_COLUMNS}
                FROM transactions
                WHERE id = %s
            """, (transaction_id,))

            row = cursor.fetchone()
            if not row:
                return None
            return self._map_row_to_transaction(row)

    def find_in_escrow_by_product_id(self, product_id: str) -> Optional[Transaction]:
        """
        Oldest transaction for a product that is still waiting for verification

        Returns:
            Transaction or None if nothing for this product is in escrow
        """
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {TRANSACTION_COLUMNS}
                FROM transactions
                WHERE product_id = %s AND status = %s
                ORDER BY date ASC
                LIMIT 1
            """, (product_id, TransactionStatus.IN_ESCROW.value))

            row = cursor.fetchone()
            if not row:
                return None
            return self._map_row_to_transaction(row)

    def create(self, transaction: Transaction, conn=None) -> Transaction:
        """Insert a transaction and return the stored row"""
        with self._cursor(conn, commit=True) as cursor:
            cursor.execute(f"""
                INSERT INTO transactions (
                    id, product_id, product_name, quantity, unit, amount,
                    buyer_wallet, seller_wallet, escrow_account, escrow_signature,
                    date, status, verified
                ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {TRANSACTION_COLUMNS}
            """, (
                transaction.id, transaction.product_id, transaction.product_name,
                transaction.quantity, transaction.unit, transaction.amount,
                transaction.buyer_wallet, transaction.seller_wallet,
                transaction.escrow_account, transaction.escrow_signature,
                transaction.date, transaction.status.value, transaction.verified,
            ))
            return self._map_row_to_transaction(cursor.fetchone())

    def mark_verified(self, transaction_id: str) -> Optional[Transaction]:
        """Move a transaction to Verified once its escrow has been released"""
        with self._cursor(commit=True) as cursor:
            cursor.execute(f"""
                UPDATE transactions
                SET status = %s,
                    verified = TRUE
                WHERE id = %s
                RETURNING {TRANSACTION_COLUMNS}
            """, (TransactionStatus.VERIFIED.value, transaction_id))

            row = cursor.fetchone()
            if not row:
                return None
            return self._map_row_to_transaction(row)
