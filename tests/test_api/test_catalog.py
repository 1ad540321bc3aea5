"""
API tests for products, categories and shipping methods
"""
from unittest.mock import patch

from storefront.core.exceptions import ConflictError, NotFoundError


class TestProductsAPI:

    @patch('storefront.api.products.CatalogService')
    def test_list_products(self, mock_service_cls, client, make_product):
        mock_service_cls.return_value.list_products.return_value = ([make_product(stock=3)], 1)

        response = client.get("/api/v1/products/?category=three-piece&sort=price_asc")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["data"][0]["price"] == 3200.0
        assert body["data"][0]["is_low_stock"] is True

    @patch('storefront.api.products.CatalogService')
    def test_get_missing_product_is_404(self, mock_service_cls, client):
        mock_service_cls.return_value.get_product.side_effect = NotFoundError("Product 404 not found")

        response = client.get("/api/v1/products/404")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product 404 not found"

    @patch('storefront.api.products.CatalogService')
    def test_catalog_sections(self, mock_service_cls, client):
        mock_service_cls.return_value.get_catalog_sections.return_value = [
            {"category": {"id": "hijab", "name": "Hijab"}, "products": []}
        ]

        response = client.get("/api/v1/products/catalog")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_create_product_requires_auth(self, client):
        response = client.post("/api/v1/products/", json={})
        assert response.status_code == 401

    def test_create_product_rejects_zero_price(self, admin_client):
        response = admin_client.post("/api/v1/products/", json={
            "name": "Free Scarf", "description": "Nothing is free", "price": 0, "category": "hijab"
        })
        assert response.status_code == 400

    @patch('storefront.api.products.CatalogService')
    def test_update_rejects_null_for_required_fields(self, mock_service_cls, admin_client):
        response = admin_client.put("/api/v1/products/1", json={"name": None, "stock": None})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid input"
        fields = {error["loc"][-1] for error in response.json()["errors"]}
        assert {"name", "stock"} <= fields
        mock_service_cls.return_value.update_product.assert_not_called()


class TestCategoriesAPI:

    @patch('storefront.api.categories.CategoryRepository')
    def test_create_category_uses_slug(self, mock_repo_cls, admin_client, sample_category):
        repo = mock_repo_cls.return_value
        repo.find_by_id.return_value = None
        repo.create.return_value = sample_category.model_copy(update={'id': 'summer-collection'})

        response = admin_client.post("/api/v1/categories/", json={"name": "Summer Collection"})

        assert response.status_code == 201
        assert repo.create.call_args[0][0] == 'summer-collection'

    @patch('storefront.api.categories.CategoryRepository')
    def test_duplicate_slug_is_409(self, mock_repo_cls, admin_client, sample_category):
        mock_repo_cls.return_value.find_by_id.return_value = sample_category

        response = admin_client.post("/api/v1/categories/", json={"name": "Three Piece"})

        assert response.status_code == 409
        mock_repo_cls.return_value.create.assert_not_called()

    def test_short_name_is_invalid(self, admin_client):
        response = admin_client.post("/api/v1/categories/", json={"name": "A"})
        assert response.status_code == 400

    @patch('storefront.api.categories.CategoryRepository')
    def test_update_missing_category_is_404(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.update.return_value = None

        response = admin_client.put("/api/v1/categories/nope", json={"name": "Nope"})

        assert response.status_code == 404

    @patch('storefront.api.categories.CategoryRepository')
    def test_delete_missing_category_is_404(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.delete.return_value = False

        response = admin_client.delete("/api/v1/categories/nope")

        assert response.status_code == 404

    @patch('storefront.api.categories.CategoryRepository')
    def test_delete_category_with_products_is_409(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.delete.side_effect = ConflictError("Category three-piece still has products")

        response = admin_client.delete("/api/v1/categories/three-piece")

        assert response.status_code == 409
        assert response.json()["detail"] == "Category three-piece still has products"

    @patch('storefront.api.categories.CategoryRepository')
    def test_whitespace_name_is_invalid(self, mock_repo_cls, admin_client):
        response = admin_client.post("/api/v1/categories/", json={"name": "   "})

        assert response.status_code == 400
        mock_repo_cls.return_value.create.assert_not_called()

    @patch('storefront.api.categories.CategoryRepository')
    def test_update_rejects_null_name(self, mock_repo_cls, admin_client):
        response = admin_client.put("/api/v1/categories/hijab", json={"name": None})

        assert response.status_code == 400
        mock_repo_cls.return_value.update.assert_not_called()


class TestShippingAPI:

    @patch('storefront.api.shipping.ShippingMethodRepository')
    def test_list_is_public(self, mock_repo_cls, client, sample_shipping_method):
        mock_repo_cls.return_value.find_all.return_value = [sample_shipping_method]

        response = client.get("/api/v1/shipping/?status=active")

        assert response.status_code == 200
        assert response.json()["data"][0]["cost"] == 60.0
        mock_repo_cls.return_value.find_all.assert_called_once_with(status='active')

    def test_negative_cost_is_invalid(self, admin_client):
        response = admin_client.post("/api/v1/shipping/", json={
            "name": "Express", "cost": -5, "estimated_time": "Same day"
        })
        assert response.status_code == 400

    @patch('storefront.api.shipping.ShippingMethodRepository')
    def test_delete_missing_method_is_404(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.delete.return_value = False

        response = admin_client.delete("/api/v1/shipping/99")

        assert response.status_code == 404
