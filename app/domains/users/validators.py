"""Users 도메인 요청 검증 규칙"""

from datetime import date
from typing import Optional, Sequence

from email_validator import EmailNotValidError, validate_email

from app.core.utils.datetime import calculate_age
from app.core.validation import RuleFor, Validator
from app.domains.users.models import Role

MINIMUM_AGE = 18
DOCUMENT_NUMBER_MAX_LENGTH = 20
PHONE_NUMBER_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_adult(date_of_birth: date, on: Optional[date] = None) -> bool:
    """기준일에 만 18세 이상인지 여부"""
    return calculate_age(date_of_birth, on) >= MINIMUM_AGE


def is_assignable_role(role: Role) -> bool:
    return role.is_assignable


def _numbers(phones: Sequence) -> list[str]:
    return [phone.number for phone in phones]


def _all_filled(phones: Sequence) -> bool:
    return all(number.strip() for number in _numbers(phones))


def _all_within_length(phones: Sequence) -> bool:
    return all(
        len(number) <= PHONE_NUMBER_MAX_LENGTH for number in _numbers(phones)
    )


def _all_unique(phones: Sequence) -> bool:
    numbers = _numbers(phones)
    return len(set(numbers)) == len(numbers)


def user_request_rules() -> list[RuleFor]:
    """생성/수정 요청 공통 규칙"""
    return [
        RuleFor("username").not_empty("Username is required."),
        RuleFor("first_name").not_empty("First name is required."),
        RuleFor("last_name").not_empty("Last name is required."),
        RuleFor("email")
        .not_empty("Email is required.")
        .must(is_valid_email, "Invalid email address format."),
        RuleFor("password")
        .not_empty("Password is required.")
        .min_length(
            PASSWORD_MIN_LENGTH,
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.",
        )
        .matches(
            r"[A-Z]", "Password must contain at least one uppercase letter."
        )
        .matches(
            r"[a-z]", "Password must contain at least one lowercase letter."
        )
        .matches(r"[0-9]", "Password must contain at least one digit.")
        .matches(
            r"[\W_]", "Password must contain at least one special character."
        ),
        RuleFor("re_password").equal_to(
            "password", "Password confirmation does not match the password."
        ),
        RuleFor("document_number")
        .not_empty("Document number is required.")
        .max_length(
            DOCUMENT_NUMBER_MAX_LENGTH,
            "Document number must be at most "
            f"{DOCUMENT_NUMBER_MAX_LENGTH} characters long.",
        ),
        RuleFor("phone_numbers")
        .not_empty("At least one phone number is required.")
        .must(_all_filled, "Phone number cannot be empty.")
        .must(
            _all_within_length,
            "Phone number must be at most "
            f"{PHONE_NUMBER_MAX_LENGTH} characters long.",
        )
        .must(_all_unique, "Phone numbers must be unique."),
        RuleFor("date_of_birth")
        .not_empty("Date of birth is required.")
        .must(is_adult, "The user must be at least 18 years old."),
        RuleFor("role")
        .not_empty("Role is required.")
        .must(
            is_assignable_role,
            "Role must be a valid enumeration value "
            "(Employee, Leader, or Director).",
        ),
    ]


class CreateUserRequestValidator(Validator):
    """사용자 생성 요청 검증기"""

    rules = user_request_rules()


class UpdateUserRequestValidator(Validator):
    """사용자 수정 요청 검증기"""

    rules = user_request_rules()
