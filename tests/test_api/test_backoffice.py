"""
API tests for inquiries, customers, uploads and auth
"""
from unittest.mock import AsyncMock, patch
from datetime import datetime

from storefront.core.exceptions import UploadError
from storefront.domain.inquiry import Inquiry
from storefront.domain.user import User
from storefront.services.auth_service import AuthenticationError


def make_inquiry(**overrides):
    data = {
        'id': 3, 'name': 'Farhana', 'email': 'farhana@example.com', 'phone': None,
        'subject': 'Sizes', 'message': 'Do you have XL?', 'status': 'new',
        'created_at': datetime(2025, 4, 2, 10, 0)
    }
    data.update(overrides)
    return Inquiry(**data)


class TestInquiriesAPI:

    @patch('storefront.api.inquiries.InquiryRepository')
    def test_submit_is_public(self, mock_repo_cls, client):
        mock_repo_cls.return_value.create.return_value = make_inquiry()

        response = client.post("/api/v1/inquiries/", json={
            "name": "Farhana", "email": "farhana@example.com", "subject": "Sizes", "message": "Do you have XL?"
        })

        assert response.status_code == 201
        assert response.json()["data"]["status"] == "new"

    def test_submit_rejects_bad_email_and_short_message(self, client):
        response = client.post("/api/v1/inquiries/", json={
            "name": "Farhana", "email": "not-an-email", "message": "Hi"
        })

        assert response.status_code == 400
        fields = {error["loc"][-1] for error in response.json()["errors"]}
        assert {"email", "message"} <= fields

    @patch('storefront.api.inquiries.InquiryRepository')
    def test_mark_as_read(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.update_status.return_value = make_inquiry(status='read')

        response = admin_client.patch("/api/v1/inquiries/3", json={"status": "read"})

        assert response.status_code == 200
        mock_repo_cls.return_value.update_status.assert_called_once_with(3, 'read')

    @patch('storefront.api.inquiries.InquiryRepository')
    def test_list_filters_by_status(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.find_all.return_value = [make_inquiry(status='replied')]

        response = admin_client.get("/api/v1/inquiries/?status=replied")

        assert response.status_code == 200
        assert response.json()["count"] == 1
        mock_repo_cls.return_value.find_all.assert_called_once_with(status='replied')

    @patch('storefront.api.inquiries.InquiryRepository')
    def test_update_missing_inquiry_is_404(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.update_status.return_value = None

        response = admin_client.patch("/api/v1/inquiries/99", json={"status": "replied"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Inquiry not found"

    @patch('storefront.api.inquiries.InquiryRepository')
    def test_delete(self, mock_repo_cls, admin_client):
        mock_repo_cls.return_value.delete.return_value = True

        response = admin_client.delete("/api/v1/inquiries/3")

        assert response.status_code == 200
        mock_repo_cls.return_value.delete.assert_called_once_with(3)

    def test_list_requires_auth(self, client):
        assert client.get("/api/v1/inquiries/").status_code == 401


class TestCustomersAPI:

    @patch('storefront.api.customers.CustomerService')
    def test_list_customers(self, mock_service_cls, admin_client):
        mock_service_cls.return_value.get_customers.return_value = [
            {'name': 'Nusrat Jahan', 'phone': '01711000000', 'total_orders': 2, 'total_spent': 3500.0}
        ]

        response = admin_client.get("/api/v1/customers/")

        assert response.status_code == 200
        assert response.json()["count"] == 1


class TestUploadAPI:

    def test_missing_file_is_400(self, admin_client):
        response = admin_client.post("/api/v1/upload/")

        assert response.status_code == 400
        assert response.json()["detail"] == "No file found"

    @patch('storefront.api.upload.ImgBBConnector')
    def test_missing_api_key_is_500(self, mock_connector_cls, admin_client):
        mock_connector_cls.side_effect = ValueError("IMGBB_API_KEY missing")

        response = admin_client.post("/api/v1/upload/", files={"file": ("a.png", b"\x89PNG", "image/png")})

        assert response.status_code == 500
        assert response.json()["detail"] == "Server configuration error: IMGBB_API_KEY missing"

    @patch('storefront.api.upload.ImgBBConnector')
    def test_upload_returns_url(self, mock_connector_cls, admin_client):
        mock_connector_cls.return_value.upload_image = AsyncMock(return_value="https://i.ibb.co/x/a.png")

        response = admin_client.post("/api/v1/upload/", files={"file": ("a.png", b"\x89PNG", "image/png")})

        assert response.status_code == 200
        assert response.json()["data"] == {"url": "https://i.ibb.co/x/a.png"}
        mock_connector_cls.return_value.upload_image.assert_awaited_once_with(b"\x89PNG", filename="a.png")

    @patch('storefront.api.upload.ImgBBConnector')
    def test_rejected_upload_is_502(self, mock_connector_cls, admin_client):
        mock_connector_cls.return_value.upload_image = AsyncMock(
            side_effect=UploadError("ImgBB Upload Failed: Invalid API v1 key.")
        )

        response = admin_client.post("/api/v1/upload/", files={"file": ("a.png", b"\x89PNG", "image/png")})

        assert response.status_code == 502
        assert response.json()["detail"] == "ImgBB Upload Failed: Invalid API v1 key."

    @patch('storefront.api.upload.ImgBBConnector')
    def test_unexpected_failure_is_500(self, mock_connector_cls, admin_client):
        mock_connector_cls.return_value.upload_image = AsyncMock(side_effect=RuntimeError("connection reset"))

        response = admin_client.post("/api/v1/upload/", files={"file": ("a.png", b"\x89PNG", "image/png")})

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error during upload"


class TestAuthAPI:

    @patch('storefront.api.auth.AuthService')
    def test_login(self, mock_service_cls, client):
        user = User(id=1, email='admin@rodelas.com', name='Admin', role='admin', created_at=datetime(2025, 1, 1))
        mock_service_cls.return_value.login.return_value = ("signed.jwt.token", user)

        response = client.post("/api/v1/auth/login", json={"email": "admin@rodelas.com", "password": "pw"})

        assert response.status_code == 200
        body = response.json()
        assert body["access_token"] == "signed.jwt.token"
        assert body["token_type"] == "bearer"
        assert body["user"]["role"] == "admin"

    @patch('storefront.api.auth.AuthService')
    def test_bad_login_is_401(self, mock_service_cls, client):
        mock_service_cls.return_value.login.side_effect = AuthenticationError("Invalid email or password")

        response = client.post("/api/v1/auth/login", json={"email": "admin@rodelas.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_logout(self, client):
        response = client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}

    def test_short_new_password_is_invalid(self, admin_client):
        response = admin_client.post("/api/v1/auth/me/change-password", json={
            "current_password": "old-password", "new_password": "short"
        })
        assert response.status_code == 400
