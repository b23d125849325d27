"""
Unit tests for ProductRepository

These tests validate repository logic without requiring a database connection.
"""
import pytest
from decimal import Decimal
from unittest.mock import patch

from agrimarket.repositories.product_repository import ProductRepository
from agrimarket.domain.product import Product, ProductStatus


class TestProductRepository:
    """Test ProductRepository methods"""

    @patch('agrimarket.repositories.base.get_db_connection_dict')
    def test_find_by_id_returns_product(self, mock_get_conn, mock_db, product_row):
        """find_by_id maps the row to a Product domain model"""
        # Arrange: mocked connection returning one product row
        conn, cursor = mock_db
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = product_row

        # Act: Call repository method
        product = ProductRepository().find_by_id('PROD-001')

        # Assert: Verify result
        assert isinstance(product, Product)
        assert product.id == 'PROD-001'
        assert product.batch_id == 'BATCH-A1234'
        assert product.price == Decimal('25.00')
        assert product.status == ProductStatus.LISTED
        assert product.is_available

        # Connection was owned by the repository, so it was closed
        cursor.execute.assert_called_once()
        cursor.close.assert_called_once()
        conn.close.assert_called_once()

    @patch('agrimarket.repositories.base.get_db_connection_dict')
    def test_find_by_id_returns_none_when_not_found(self, mock_get_conn, mock_db):
        conn, cursor = mock_db
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = None

        assert ProductRepository().find_by_id('PROD-404') is None

    def test_find_by_id_uses_given_connection_and_locks_row(self, mock_db, product_row):
        """With an open connection the repository neither opens nor closes one"""
        # Arrange
        conn, cursor = mock_db
        cursor.fetchone.return_value = product_row

        # Act
        with patch('agrimarket.repositories.base.get_db_connection_dict') as mock_get_conn:
            ProductRepository().find_by_id('PROD-001', conn=conn, for_update=True)
            mock_get_conn.assert_not_called()

        # Assert
        sql = cursor.execute.call_args[0][0]
        assert 'FOR UPDATE' in sql
        cursor.close.assert_called_once()
        conn.close.assert_not_called()
        conn.commit.assert_not_called()

    @patch('agrimarket.repositories.base.get_db_connection_dict')
    def test_find_available_filters_listed_with_stock(self, mock_get_conn, mock_db, product_row):
        # Arrange
        conn, cursor = mock_db
        mock_get_conn.return_value = conn
        cursor.fetchall.return_value = [product_row]

        # Act
        products = ProductRepository().find_available()

        # Assert
        assert [p.id for p in products] == ['PROD-001']
        sql, params = cursor.execute.call_args[0]
        assert 'status = %s' in sql
        assert 'quantity > 0' in sql
        assert params == ('Listed',)

    @patch('agrimarket.repositories.base.get_db_connection_dict')
    def test_find_all_returns_every_status(self, mock_get_conn, mock_db, product_row):
        # Arrange
        conn, cursor = mock_db
        mock_get_conn.return_value = conn
        sold_out = dict(product_row, id='PROD-002', quantity=Decimal('0'), status='Sold Out')
        cursor.fetchall.return_value = [product_row, sold_out]

        # Act
        products = ProductRepository().find_all()

        # Assert
        assert len(products) == 2
        assert products[1].status == ProductStatus.SOLD_OUT
        assert not products[1].is_available

    @patch('agrimarket.repositories.base.get_db_connection_dict')
    def test_create_commits_and_returns_stored_row(self, mock_get_conn, mock_db, product_row, product):
        # Arrange
        conn, cursor = mock_db
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = product_row

        # Act
        created = ProductRepository().create(product)

        # Assert
        assert created.id == product.id
        params = cursor.execute.call_args[0][1]
        assert params[0] == 'PROD-001'
        assert params[-1] == 'Listed'
        conn.commit.assert_called_once()
        conn.close.assert_called_once()

    @patch('agrimarket.repositories.base.get_db_connection_dict')
    def test_create_rolls_back_on_error(self, mock_get_conn, mock_db, product):
        # Arrange
        conn, cursor = mock_db
        mock_get_conn.return_value = conn
        cursor.execute.side_effect = RuntimeError("duplicate key")

        # Act
        with pytest.raises(RuntimeError):
            ProductRepository().create(product)

        # Assert
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()

    def test_update_stock_inside_caller_transaction_does_not_commit(self, mock_db, product_row):
        conn, cursor = mock_db
        cursor.fetchone.return_value = dict(product_row, quantity=Decimal('0'), status='Sold Out')

        updated = ProductRepository().update_stock(
            'PROD-001', Decimal('0'), ProductStatus.SOLD_OUT, conn=conn
        )

        assert updated.status == ProductStatus.SOLD_OUT
        assert cursor.execute.call_args[0][1] == (Decimal('0'), 'Sold Out', 'PROD-001')
        conn.commit.assert_not_called()
        conn.close.assert_not_called()


class TestProductModel:

    def test_supplier_wallet_prefix(self, product_row):
        product = Product(**dict(product_row, supplier='wallet:9xQeWvG816bUx9EP'))
        assert product.supplier_wallet == '9xQeWvG816bUx9EP'

    def test_supplier_without_prefix_has_no_wallet(self, product):
        assert product.supplier_wallet is None

    def test_to_dict_uses_camel_case_and_json_types(self, product):
        data = product.to_dict()

        assert data['batchId'] == 'BATCH-A1234'
        assert data['price'] == 25.0
        assert data['status'] == 'Listed'
        assert data['date'].startswith('2023-11-01')
        assert 'batch_id' not in data
