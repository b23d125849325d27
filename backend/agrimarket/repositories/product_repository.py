"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
"""
from decimal import Decimal
from typing import List, Optional

from agrimarket.domain.product import Product, ProductStatus
from agrimarket.repositories.base import BaseRepository

PRODUCT_COLUMNS = """
    id, name, description, price, quantity, unit,
    batch_id, supplier, location, date, status
"""


class ProductRepository(BaseRepository):
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        return Product(
            id=row['id'],
            name=row['name'],
            description=row.get('description'),
            price=row['price'],
            quantity=row['quantity'],
            unit=row['unit'],
            batch_id=row['batch_id'],
            supplier=row['supplier'],
            location=row.get('location'),
            date=row['date'],
            status=row['status'],
        )

    def find_all(self) -> List[Product]:
        """All products, newest listing first (supplier view)"""
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                ORDER BY date DESC
            """)
            return [self._map_row_to_product(row) for row in cursor.fetchall()]

    def find_available(self) -> List[Product]:
        """Products buyers can purchase: Listed with stock left"""
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE status = %s AND quantity > 0
                ORDER BY date DESC
            """, (ProductStatus.LISTED.value,))
            return [self._map_row_to_product(row) for row in cursor.fetchall()]

    def find_by_id(self, product_id: str, conn=None, for_update: bool = False) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product ID (PROD-xxxxxx)
            conn: Join an open transaction instead of opening a connection
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            Product or None if not found
        """
        lock = " FOR UPDATE" if for_update else ""
        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s{lock}
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None
            return self._map_row_to_product(row)

    def create(self, product: Product) -> Product:
        """Insert a new product listing and return the stored row"""
        with self._cursor(commit=True) as cursor:
            cursor.execute(f"""
                INSERT INTO products (
                    id, name, description, price, quantity, unit,
                    batch_id, supplier, location, date, status
                ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {PRODUCT_COLUMNS}
            """, (
                product.id, product.name, product.description,
                product.price, product.quantity, product.unit,
                product.batch_id, product.supplier, product.location,
                product.date, product.status.value,
            ))
            return self._map_row_to_product(cursor.fetchone())

    def update_stock(
        self,
        product_id: str,
        quantity: Decimal,
        status: ProductStatus,
        conn=None
    ) -> Optional[Product]:
        """
        Set remaining quantity and listing status

        Returns:
            Updated product, or None if the product does not exist
        """
        with self._cursor(conn, commit=True) as cursor:
            cursor.execute(f"""
                UPDATE products
                SET quantity = %s,
                    status = %s
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, (quantity, status.value, product_id))

            row = cursor.fetchone()
            if not row:
                return None
            return self._map_row_to_product(row)
