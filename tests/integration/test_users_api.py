"""Users API 통합 테스트 - 엔드포인트 및 인증 검증"""

from datetime import date

import pytest

from app.domains.users.models import Role
from app.domains.users.repository import UserRepository


def _payload(index: int = 1, **overrides) -> dict:
    payload = {
        "username": f"employee{index}",
        "password": "Str0ng!Pass",
        "re_password": "Str0ng!Pass",
        "first_name": "John",
        "last_name": "Doe",
        "email": f"employee{index}@example.com",
        "document_number": f"DN-{index:05d}",
        "date_of_birth": "1990-05-17",
        "role": "Employee",
        "phone_numbers": [{"number": f"+1555{index:05d}"}],
    }
    payload.update(overrides)
    return payload


class TestAuthenticationRequired:
    """Bearer 토큰 필수 테스트"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("POST", "/user"),
            ("GET", "/user/List"),
            ("GET", "/user/1"),
            ("PUT", "/user/1"),
            ("DELETE", "/user/1"),
        ],
    )
    async def test_missing_token_returns_401(self, client, method, path):
        """토큰 없이 요청하면 401"""
        response = await client.request(method, path, json={})

        assert response.status_code == 401
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_invalid_token_returns_401(self, client):
        response = await client.get(
            "/user/List", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"


class TestLoginAPI:
    """로그인 API 테스트"""

    @pytest.mark.asyncio
    async def test_login_success(self, client, admin_user):
        """로그인 성공 시 토큰 발급, 토큰으로 보호된 API 접근"""
        # When
        response = await client.post(
            "/user/Login",
            json={"username": "admin", "password": "Str0ng!Pass"},
        )

        # Then
        assert response.status_code == 200
        token = response.json()["data"]["access_token"]
        listed = await client.get(
            "/user/List", headers={"Authorization": f"Bearer {token}"}
        )
        assert listed.status_code == 200

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, admin_user):
        response = await client.post(
            "/user/Login",
            json={"username": "admin", "password": "Wr0ng!Pass"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, client, db_session):
        response = await client.post(
            "/user/Login",
            json={"username": "ghost", "password": "Str0ng!Pass"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"


class TestCreateUserAPI:
    """직원 등록 API 테스트"""

    @pytest.mark.asyncio
    async def test_create_user(self, client, admin_headers):
        """등록 성공 (201), 응답에 비밀번호 없음"""
        # When
        response = await client.post(
            "/user", json=_payload(role="Director"), headers=admin_headers
        )

        # Then
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] > 0
        assert data["role"] == "Director"
        assert data["phone_numbers"][0]["number"] == "+155500001"
        assert "password" not in data
        assert "password_hash" not in data

    @pytest.mark.asyncio
    async def test_validation_errors_are_collected(
        self, client, admin_headers
    ):
        """검증 실패는 400, 실패 항목 모두 반환"""
        response = await client.post(
            "/user",
            json=_payload(
                username="",
                email="broken",
                re_password="different",
                phone_numbers=[],
            ),
            headers=admin_headers,
        )

        assert response.status_code == 400
        errors = response.json()["error"]["detail"]["errors"]
        assert {e["field"] for e in errors} == {
            "username",
            "email",
            "re_password",
            "phone_numbers",
        }

    @pytest.mark.asyncio
    async def test_underage_user_rejected(self, client, admin_headers):
        response = await client.post(
            "/user",
            json=_payload(date_of_birth=date.today().isoformat()),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["detail"]["errors"] == [
            {
                "field": "date_of_birth",
                "message": "The user must be at least 18 years old.",
            }
        ]

    @pytest.mark.asyncio
    async def test_role_exceeding_caller_rejected(
        self, client, db_session, user_factory, make_auth_header
    ):
        """Leader는 Director를 등록할 수 없음"""
        # Given
        leader = await UserRepository(db_session).create(
            user_factory(50, role=Role.LEADER)
        )

        # When
        response = await client.post(
            "/user",
            json=_payload(role="Director"),
            headers=make_auth_header(leader),
        )

        # Then
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ROLE_NOT_ALLOWED"

    @pytest.mark.asyncio
    async def test_duplicate_document_number(self, client, admin_headers):
        await client.post("/user", json=_payload(1), headers=admin_headers)

        response = await client.post(
            "/user",
            json=_payload(2, document_number="DN-00001"),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert (
            response.json()["error"]["code"]
            == "DOCUMENT_NUMBER_ALREADY_EXISTS"
        )

    @pytest.mark.asyncio
    async def test_duplicate_username(self, client, admin_headers):
        await client.post("/user", json=_payload(1), headers=admin_headers)

        response = await client.post(
            "/user",
            json=_payload(2, username="employee1"),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USERNAME_ALREADY_EXISTS"

    @pytest.mark.asyncio
    async def test_unknown_manager(self, client, admin_headers):
        response = await client.post(
            "/user", json=_payload(manager_id=9999), headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MANAGER_NOT_FOUND"


class TestUsersListAPI:
    """직원 목록 조회 API 테스트"""

    @pytest.mark.asyncio
    async def test_pagination(self, client, admin_headers):
        """page=2, page_size=2"""
        # Given
        for index in range(1, 6):
            await client.post(
                "/user", json=_payload(index), headers=admin_headers
            )

        # When
        response = await client.get(
            "/user/List?page=2&page_size=2&sort_by=username",
            headers=admin_headers,
        )

        # Then
        assert response.status_code == 200
        body = response.json()
        # admin + employee1..5 = 6명
        assert body["meta"]["total"] == 6
        assert body["meta"]["has_next"] is True
        assert body["meta"]["has_prev"] is True
        assert [u["username"] for u in body["data"]] == [
            "employee2",
            "employee3",
        ]

    @pytest.mark.asyncio
    async def test_unpaginated_returns_all(self, client, admin_headers):
        for index in range(1, 4):
            await client.post(
                "/user", json=_payload(index), headers=admin_headers
            )

        response = await client.get(
            "/user/List?page=1&page_size=0", headers=admin_headers
        )

        body = response.json()
        assert len(body["data"]) == 4
        assert body["meta"]["has_next"] is True
        assert body["meta"]["has_prev"] is False

    @pytest.mark.asyncio
    async def test_large_page_size_is_accepted(self, client, admin_headers):
        """page_size 상한 없음"""
        # Given
        await client.post("/user", json=_payload(), headers=admin_headers)

        # When
        response = await client.get(
            "/user/List?page=1&page_size=5000", headers=admin_headers
        )

        # Then
        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 2
        assert body["meta"]["has_next"] is False

    @pytest.mark.asyncio
    async def test_filter_by_role(self, client, admin_headers):
        await client.post(
            "/user", json=_payload(1, role="Leader"), headers=admin_headers
        )
        await client.post("/user", json=_payload(2), headers=admin_headers)

        response = await client.get(
            "/user/List?role=Leader", headers=admin_headers
        )

        assert [u["username"] for u in response.json()["data"]] == [
            "employee1"
        ]

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self, client, admin_headers):
        response = await client.get(
            "/user/List?sort_by=password_hash", headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SORT_FIELD"


class TestGetUpdateDeleteAPI:
    """상세 조회 / 수정 / 삭제 API 테스트"""

    @pytest.mark.asyncio
    async def test_get_user(self, client, admin_headers):
        created = await client.post(
            "/user", json=_payload(), headers=admin_headers
        )
        user_id = created.json()["data"]["id"]

        response = await client.get(f"/user/{user_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["username"] == "employee1"

    @pytest.mark.asyncio
    async def test_get_missing_user_returns_400(self, client, admin_headers):
        response = await client.get("/user/9999", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_user(self, client, admin_headers):
        """전체 덮어쓰기 후 새 비밀번호로 로그인 가능"""
        # Given
        created = await client.post(
            "/user", json=_payload(), headers=admin_headers
        )
        user = created.json()["data"]
        phone_id = user["phone_numbers"][0]["id"]

        # When
        response = await client.put(
            f"/user/{user['id']}",
            json=_payload(
                first_name="Jane",
                password="N3w!Password",
                re_password="N3w!Password",
                phone_numbers=[
                    {"id": phone_id, "number": "+19990000"},
                    {"number": "+18880000"},
                ],
            ),
            headers=admin_headers,
        )

        # Then
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["first_name"] == "Jane"
        assert data["phone_numbers"][0]["id"] == phone_id
        assert [p["number"] for p in data["phone_numbers"]] == [
            "+19990000",
            "+18880000",
        ]
        login = await client.post(
            "/user/Login",
            json={"username": "employee1", "password": "N3w!Password"},
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_update_overwrites_role_without_role_cap(
        self, client, admin_headers
    ):
        """수정은 인증만 요구하며 역할 상한은 생성 시에만 적용"""
        # Given
        created = await client.post(
            "/user", json=_payload(), headers=admin_headers
        )
        user_id = created.json()["data"]["id"]
        login = await client.post(
            "/user/Login",
            json={"username": "employee1", "password": "Str0ng!Pass"},
        )
        token = login.json()["data"]["access_token"]
        employee_headers = {"Authorization": f"Bearer {token}"}

        # When
        response = await client.put(
            f"/user/{user_id}",
            json=_payload(role="Director"),
            headers=employee_headers,
        )

        # Then
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "Director"

    @pytest.mark.asyncio
    async def test_update_missing_user(self, client, admin_headers):
        response = await client.put(
            "/user/9999", json=_payload(), headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete_user(self, client, admin_headers):
        created = await client.post(
            "/user", json=_payload(), headers=admin_headers
        )
        user_id = created.json()["data"]["id"]

        response = await client.delete(
            f"/user/{user_id}", headers=admin_headers
        )

        assert response.status_code == 204
        missing = await client.get(f"/user/{user_id}", headers=admin_headers)
        assert missing.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_manager_with_subordinates(
        self, client, admin_user, admin_headers
    ):
        """매니저로 참조 중인 직원은 삭제 불가"""
        await client.post(
            "/user",
            json=_payload(manager_id=admin_user.id),
            headers=admin_headers,
        )

        response = await client.delete(
            f"/user/{admin_user.id}", headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_HAS_SUBORDINATES"

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, client, admin_headers):
        response = await client.delete("/user/9999", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"
