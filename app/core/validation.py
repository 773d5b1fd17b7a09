"""선언적 필드 검증

필드별 규칙을 선언하고, 실패를 모두 모아 ``ValidationFailure`` 목록으로 반환합니다.
첫 실패에서 멈추지 않습니다.

Example::

    class LoginValidator(Validator):
        rules = [
            RuleFor("username").not_empty("Username is required."),
            RuleFor("password")
            .not_empty("Password is required.")
            .min_length(8, "Password must be at least 8 characters long."),
        ]

    failures = LoginValidator().validate(request)
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Sequence

from app.core.exceptions import RequestValidationException

Check = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class ValidationFailure:
    """필드 검증 실패 항목"""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class RuleFor:
    """단일 필드 규칙 빌더

    ``must``/``matches``/``max_length`` 계열 검사는 값이 None이면 건너뜁니다.
    값의 존재 여부는 ``not_empty``로 검사하며, 실패하면 같은 필드의 나머지
    검사는 수행하지 않습니다.
    """

    def __init__(self, field: str):
        self.field = field
        self.checks: list[tuple[Check, str, bool]] = []

    def _add(
        self, check: Check, message: str, stop_on_failure: bool = False
    ) -> "RuleFor":
        self.checks.append((check, message, stop_on_failure))
        return self

    def not_empty(self, message: str) -> "RuleFor":
        def check(value: Any, _instance: Any) -> bool:
            if value is None:
                return False
            if isinstance(value, str):
                return bool(value.strip())
            if isinstance(value, (list, tuple, set, dict)):
                return len(value) > 0
            return True

        return self._add(check, message, stop_on_failure=True)

    def must(
        self, predicate: Callable[[Any], bool], message: str
    ) -> "RuleFor":
        return self._add(
            lambda value, _instance: value is None or predicate(value),
            message,
        )

    def min_length(self, length: int, message: str) -> "RuleFor":
        return self.must(lambda value: len(value) >= length, message)

    def max_length(self, length: int, message: str) -> "RuleFor":
        return self.must(lambda value: len(value) <= length, message)

    def matches(self, pattern: str, message: str) -> "RuleFor":
        compiled = re.compile(pattern)
        return self.must(
            lambda value: compiled.search(value) is not None, message
        )

    def equal_to(self, other_field: str, message: str) -> "RuleFor":
        return self._add(
            lambda value, instance: value == getattr(instance, other_field),
            message,
        )

    def evaluate(self, instance: Any) -> list[ValidationFailure]:
        value = getattr(instance, self.field, None)
        failures: list[ValidationFailure] = []
        for check, message, stop_on_failure in self.checks:
            if check(value, instance):
                continue
            failures.append(
                ValidationFailure(field=self.field, message=message)
            )
            if stop_on_failure:
                break
        return failures


class Validator:
    """규칙 집합 기반 검증기"""

    rules: ClassVar[Sequence[RuleFor]] = ()

    def validate(self, instance: Any) -> list[ValidationFailure]:
        failures: list[ValidationFailure] = []
        for rule in self.rules:
            failures.extend(rule.evaluate(instance))
        return failures

    def ensure_valid(self, instance: Any) -> None:
        """검증 실패가 있으면 RequestValidationException 발생"""
        failures = self.validate(instance)
        if failures:
            raise RequestValidationException(
                [failure.to_dict() for failure in failures]
            )
