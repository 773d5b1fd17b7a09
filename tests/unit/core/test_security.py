"""비밀번호 해싱 / JWT 발급기 테스트"""

from dataclasses import dataclass
from datetime import timedelta

import jwt
import pytest

from app.core.exceptions import (
    ErrorCode,
    TokenConfigurationError,
    UnauthorizedException,
)
from app.core.security import TokenIssuer, hash_password, verify_password
from app.core.utils.datetime import now_utc
from app.domains.users.models import Role

SECRET = "unit-test-secret-key-0123456789abcdef"


@dataclass
class Subject:
    id: int
    username: str
    role: Role


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(secret_key=SECRET, expire_minutes=480)


class TestPasswordHashing:
    def test_hash_is_salted(self):
        """같은 비밀번호라도 해시가 다름"""
        first = hash_password("Str0ng!Pass")
        second = hash_password("Str0ng!Pass")

        assert first != second
        assert verify_password("Str0ng!Pass", first)
        assert verify_password("Str0ng!Pass", second)

    def test_wrong_password(self):
        hashed = hash_password("Str0ng!Pass")
        assert verify_password("Wr0ng!Pass", hashed) is False

    def test_malformed_hash(self):
        assert verify_password("Str0ng!Pass", "not-a-bcrypt-hash") is False


class TestTokenIssuer:
    """TokenIssuer 테스트"""

    def test_missing_secret_key(self):
        with pytest.raises(TokenConfigurationError):
            TokenIssuer(secret_key=None)

        with pytest.raises(TokenConfigurationError):
            TokenIssuer(secret_key="")

    def test_generate_claims(self, issuer):
        """username, id, role, iat, exp claim 포함"""
        # Given
        issued_at = now_utc().replace(microsecond=0)
        subject = Subject(id=7, username="jdoe", role=Role.LEADER)

        # When
        token = issuer.generate(subject, issued_at=issued_at)

        # Then
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["username"] == "jdoe"
        assert claims["id"] == 7
        assert claims["role"] == "Leader"
        assert claims["iat"] == int(issued_at.timestamp())
        assert claims["exp"] - claims["iat"] == 480 * 60

    def test_decode_round_trip(self, issuer):
        token = issuer.generate(
            Subject(id=1, username="admin", role=Role.ADMIN)
        )

        claims = issuer.decode(token)

        assert claims["role"] == "Admin"

    def test_decode_expired(self, issuer):
        token = issuer.generate(
            Subject(id=1, username="jdoe", role=Role.EMPLOYEE),
            issued_at=now_utc() - timedelta(minutes=481),
        )

        with pytest.raises(UnauthorizedException) as exc_info:
            issuer.decode(token)

        assert exc_info.value.error_code == ErrorCode.TOKEN_EXPIRED

    def test_decode_wrong_signature(self, issuer):
        other = TokenIssuer(secret_key="another-secret-key-0123456789abcdef")
        token = other.generate(
            Subject(id=1, username="jdoe", role=Role.EMPLOYEE)
        )

        with pytest.raises(UnauthorizedException) as exc_info:
            issuer.decode(token)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    def test_decode_garbage(self, issuer):
        with pytest.raises(UnauthorizedException):
            issuer.decode("not.a.token")
