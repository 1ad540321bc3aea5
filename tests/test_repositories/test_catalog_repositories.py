"""
Unit tests for CategoryRepository, ShippingMethodRepository and InquiryRepository
"""
import pytest
from unittest.mock import patch
from decimal import Decimal
from datetime import datetime

from psycopg2 import errors

from storefront.core.exceptions import ConflictError
from storefront.repositories.category_repository import CategoryRepository
from storefront.repositories.shipping_repository import ShippingMethodRepository
from storefront.repositories.inquiry_repository import InquiryRepository
from storefront.domain.catalog import CategoryCreate, CategoryUpdate, ShippingMethodUpdate
from storefront.domain.inquiry import InquiryCreate


class TestCategoryRepository:

    @patch('storefront.repositories.category_repository.get_db_connection_dict')
    def test_find_all_includes_product_counts(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchall.return_value = [
            {'id': 'bedsheet', 'name': 'Bedsheet', 'description': None, 'image': None,
             'created_at': datetime(2025, 1, 1), 'updated_at': None, 'product_count': 2},
            {'id': 'hijab', 'name': 'Hijab', 'description': None, 'image': None,
             'created_at': datetime(2025, 1, 1), 'updated_at': None, 'product_count': 0},
        ]

        categories = CategoryRepository().find_all()

        assert [c.id for c in categories] == ['bedsheet', 'hijab']
        assert categories[0].product_count == 2
        assert "LEFT JOIN products" in mock_cursor.execute.call_args[0][0]

    @patch('storefront.repositories.category_repository.get_db_connection_dict')
    def test_create_uses_given_slug(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchone.return_value = {
            'id': 'summer-collection', 'name': 'Summer Collection', 'description': None,
            'image': None, 'created_at': datetime(2025, 5, 1), 'updated_at': None
        }

        category = CategoryRepository().create('summer-collection', CategoryCreate(name='Summer Collection'))

        assert mock_cursor.execute.call_args[0][1][0] == 'summer-collection'
        assert category.id == 'summer-collection'
        mock_conn.commit.assert_called_once()

    @patch('storefront.repositories.category_repository.get_db_connection_dict')
    def test_update_returns_none_when_missing(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchone.return_value = None

        assert CategoryRepository().update('nope', CategoryUpdate(name='Nope')) is None

    @patch('storefront.repositories.category_repository.get_db_connection_dict')
    def test_delete_with_products_is_conflict(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.execute.side_effect = errors.ForeignKeyViolation("products_category_fkey")

        with pytest.raises(ConflictError, match="Category hijab still has products"):
            CategoryRepository().delete('hijab')

        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()


class TestShippingMethodRepository:

    @patch('storefront.repositories.shipping_repository.get_db_connection_dict')
    def test_find_all_orders_by_cost_and_filters_status(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchall.return_value = [
            {'id': 1, 'name': 'Inside Rajshahi', 'cost': Decimal('60'), 'estimated_time': '24-48 hours',
             'status': 'active', 'created_at': datetime(2025, 1, 1), 'updated_at': None},
        ]

        methods = ShippingMethodRepository().find_all(status='active')

        query, params = mock_cursor.execute.call_args[0]
        assert "ORDER BY cost ASC" in query
        assert params == ('active',)
        assert methods[0].is_active

    @patch('storefront.repositories.shipping_repository.get_db_connection_dict')
    def test_update_sets_only_given_fields(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchone.return_value = {
            'id': 2, 'name': 'Outside Rajshahi', 'cost': Decimal('120'), 'estimated_time': '3-5 business days',
            'status': 'inactive', 'created_at': datetime(2025, 1, 1), 'updated_at': datetime(2025, 2, 1)
        }

        method = ShippingMethodRepository().update(2, ShippingMethodUpdate(status='inactive'))

        query, params = mock_cursor.execute.call_args[0]
        assert "status = %s" in query
        assert "cost = %s" not in query
        assert params == ['inactive', 2]
        assert not method.is_active


class TestInquiryRepository:

    @patch('storefront.repositories.inquiry_repository.get_db_connection_dict')
    def test_create_starts_as_new(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchone.return_value = {
            'id': 3, 'name': 'Farhana', 'email': 'farhana@example.com', 'phone': None,
            'subject': 'Sizes', 'message': 'Do you have XL?', 'status': 'new',
            'created_at': datetime(2025, 4, 2), 'updated_at': None
        }

        inquiry = InquiryRepository().create(InquiryCreate(
            name='Farhana', email='farhana@example.com', subject='Sizes', message='Do you have XL?'
        ))

        query, params = mock_cursor.execute.call_args[0]
        assert "'new'" in query
        assert params[1] == 'farhana@example.com'
        assert inquiry.status == 'new'
        mock_conn.commit.assert_called_once()

    @patch('storefront.repositories.inquiry_repository.get_db_connection_dict')
    def test_find_all_newest_first(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchall.return_value = []

        InquiryRepository().find_all()

        assert "ORDER BY created_at DESC" in mock_cursor.execute.call_args[0][0]

    @patch('storefront.repositories.inquiry_repository.get_db_connection_dict')
    def test_update_status_returns_none_when_missing(self, mock_get_conn, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_get_conn.return_value = mock_conn
        mock_cursor.fetchone.return_value = None

        assert InquiryRepository().update_status(99, 'read') is None
