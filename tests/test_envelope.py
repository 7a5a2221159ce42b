"""응답 봉투 및 예외 매핑 테스트.

Envelope and exception mapping tests — Localized messages chosen by the
Accept-Language header, framework errors and unhandled exceptions.
"""

from datetime import date

from httpx import AsyncClient

from tests.conftest import auth_header
from usermgmt.services.user_service import user_service

URL = "/api/v1/users"


class TestLocalizedEnvelope:
    """Accept-Language 기반 메시지 선택 테스트."""

    async def test_default_language(self, client: AsyncClient, admin_token):
        res = await client.get(f"{URL}/all", headers=auth_header(admin_token))
        body = res.json()
        assert set(body) == {"status", "message", "data", "timestamp"}
        assert body["message"] == "Get list of users successfully"
        assert body["timestamp"] == date.today().isoformat()

    async def test_vietnamese(self, client: AsyncClient, admin_token):
        res = await client.get(f"{URL}/all", headers=auth_header(admin_token, "vi"))
        assert res.json()["message"] == "Lấy danh sách người dùng thành công"

    async def test_language_range_with_region(self, client: AsyncClient, admin_token):
        """vi-VN,vi;q=0.9 — 주 언어 태그 사용."""
        res = await client.get(
            f"{URL}/all", headers=auth_header(admin_token, "vi-VN,vi;q=0.9,en;q=0.8")
        )
        assert res.json()["message"] == "Lấy danh sách người dùng thành công"

    async def test_unknown_language_falls_back(self, client: AsyncClient, admin_token):
        res = await client.get(f"{URL}/all", headers=auth_header(admin_token, "fr-FR"))
        assert res.json()["message"] == "Get list of users successfully"

    async def test_localized_error(self, client: AsyncClient, admin_token):
        res = await client.get(
            f"{URL}/00000000-0000-0000-0000-000000000000",
            headers=auth_header(admin_token, "vi"),
        )
        assert res.status_code == 404
        assert res.json()["message"] == "Không tìm thấy người dùng"

    async def test_localized_conflict_params(self, client: AsyncClient, admin_token, normal_user):
        """파라미터가 포함된 메시지 — Message template params."""
        res = await client.post(
            URL,
            json={"username": normal_user.username, "password": "pw"},
            headers=auth_header(admin_token, "vi"),
        )
        assert res.status_code == 409
        assert res.json()["message"] == "Tên đăng nhập alice01 đã tồn tại"


class TestErrorMapping:
    """예외 매핑 테스트."""

    async def test_unknown_route(self, client: AsyncClient):
        """라우트 없음 — 404 봉투."""
        res = await client.get("/api/v1/nothing-here")
        assert res.status_code == 404
        body = res.json()
        assert body["status"] == 404
        assert body["data"] is None

    async def test_method_not_allowed(self, client: AsyncClient):
        res = await client.patch(f"{URL}/all")
        assert res.status_code == 405
        assert res.json()["status"] == 405

    async def test_validation_error_shape(self, client: AsyncClient):
        res = await client.post("/api/auth/authenticate", content=b"not json",
                                headers={"Content-Type": "application/json"})
        assert res.status_code == 400
        body = res.json()
        assert body["message"] == "Bad request"
        assert isinstance(body["data"], list)
        assert {"field", "message"} <= set(body["data"][0])

    async def test_unhandled_exception(self, client: AsyncClient, admin_token, monkeypatch):
        """처리되지 않은 예외 — 500 봉투."""
        async def _boom(*args, **kwargs):
            raise RuntimeError("database exploded")

        monkeypatch.setattr(user_service, "get_all_user", _boom)
        res = await client.get(f"{URL}/all", headers=auth_header(admin_token, "vi"))
        assert res.status_code == 500
        body = res.json()
        assert body["status"] == 500
        assert body["message"] == "Lỗi máy chủ nội bộ"
        assert body["data"] is None

    async def test_health(self, client: AsyncClient):
        """상태 확인도 응답 봉투 사용 (Health check uses the envelope)."""
        res = await client.get("/health")
        assert res.status_code == 200
        body = res.json()
        assert body["status"] == 200
        assert body["message"] == "Service is running"
        assert body["data"] == {"status": "ok"}
        assert body["timestamp"] == date.today().isoformat()

    async def test_health_localized(self, client: AsyncClient):
        res = await client.get("/health", headers={"Accept-Language": "vi"})
        assert res.json()["message"] == "Dịch vụ đang hoạt động"
