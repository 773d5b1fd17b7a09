"""예외 및 예외 핸들러 테스트"""

import json

import pytest
from fastapi.exceptions import RequestValidationError

from app.core.exceptions import (
    BadRequestException,
    ErrorCode,
    InvalidSortFieldException,
    RequestValidationException,
    TokenConfigurationError,
    UnauthorizedException,
    base_exception_handler,
    generic_exception_handler,
    request_validation_exception_handler,
)


class TestExceptions:
    """공통 예외 테스트"""

    def test_bad_request_defaults(self):
        exc = BadRequestException()
        assert exc.status_code == 400
        assert exc.error_code == ErrorCode.BAD_REQUEST
        assert exc.detail_info == {}

    def test_unauthorized_custom_code(self):
        exc = UnauthorizedException(
            message="Token has expired.", error_code=ErrorCode.TOKEN_EXPIRED
        )
        assert exc.status_code == 401
        assert exc.error_code == "TOKEN_EXPIRED"
        assert exc.message == "Token has expired."

    def test_request_validation_exception_carries_all_errors(self):
        errors = [
            {"field": "username", "message": "Username is required."},
            {"field": "email", "message": "Email is required."},
        ]
        exc = RequestValidationException(errors)

        assert exc.status_code == 400
        assert exc.error_code == ErrorCode.VALIDATION_ERROR
        assert exc.detail_info == {"errors": errors}

    def test_invalid_sort_field_is_bad_request(self):
        exc = InvalidSortFieldException("shoe_size")
        assert exc.status_code == 400
        assert exc.error_code == ErrorCode.INVALID_SORT_FIELD
        assert "shoe_size" in exc.message

    def test_token_configuration_error(self):
        exc = TokenConfigurationError()
        assert exc.status_code == 500
        assert exc.message == "SECRET_KEY not found."


class TestExceptionHandlers:
    """예외 핸들러 응답 형식 테스트"""

    @pytest.mark.asyncio
    async def test_base_exception_handler_format(self):
        """에러 응답 envelope 확인"""
        # Given
        exc = BadRequestException(
            message="User not found", detail={"user_id": 1}
        )

        # When
        response = await base_exception_handler(None, exc)

        # Then
        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["success"] is False
        assert body["error"]["code"] == "BAD_REQUEST"
        assert body["error"]["detail"] == {"user_id": 1}

    @pytest.mark.asyncio
    async def test_request_validation_error_becomes_400(self):
        """요청 파싱 실패는 400 VALIDATION_ERROR로 변환"""
        # Given
        exc = RequestValidationError(
            [
                {
                    "loc": ("body", "date_of_birth"),
                    "msg": "Input should be a valid date",
                    "type": "date_parsing",
                }
            ]
        )

        # When
        response = await request_validation_exception_handler(None, exc)

        # Then
        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["detail"]["errors"] == [
            {
                "field": "date_of_birth",
                "message": "Input should be a valid date",
            }
        ]

    @pytest.mark.asyncio
    async def test_generic_exception_handler_hides_details(self):
        response = await generic_exception_handler(
            None, RuntimeError("db password leaked")
        )

        body = json.loads(response.body)
        assert response.status_code == 500
        assert "leaked" not in response.body.decode()
        assert body["error"]["code"] == "INTERNAL_ERROR"
