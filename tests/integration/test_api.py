"""API 통합 테스트 - 응답 구조, 미들웨어 검증"""

import pytest


class TestHealthCheck:
    """헬스 체크 API 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_response_structure(self, client):
        """헬스 체크 응답 구조 검증"""
        response = await client.get("/health")

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "OK"
        assert data["data"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_check_is_not_logged(self, client):
        """/health는 로깅 제외 경로 (X-Request-ID 없음)"""
        response = await client.get("/health")

        assert "X-Request-ID" not in response.headers


class TestRequestIdHeader:
    """요청 ID 헤더 테스트"""

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.post(
            "/user/Login",
            json={"username": "nobody", "password": "x"},
            headers={"X-Request-ID": "req-from-client"},
        )

        assert response.headers["X-Request-ID"] == "req-from-client"
        assert "X-Process-Time" in response.headers

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client):
        response = await client.post(
            "/user/Login", json={"username": "nobody", "password": "x"}
        )

        assert response.headers["X-Request-ID"]


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_unknown_route_returns_404(self, client):
        response = await client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_malformed_body_returns_400(self, client):
        """본문 파싱 실패는 422가 아니라 400"""
        response = await client.post("/user/Login", json={"username": "x"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "VALIDATION_ERROR"
        assert data["error"]["detail"]["errors"][0]["field"] == "password"
