"""
Field checks shared by registration, password reset and account management.
Each check raises a 400 HTTPException before any store call is made.
"""
import re
from typing import Optional

from fastapi import HTTPException


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# lowercase, uppercase, digit and one non-alphanumeric character
COMPLEXITY_RE = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[^a-zA-Z0-9])")

MIN_REGISTER_USERNAME = 9
MIN_ADMIN_USERNAME = 4
MIN_PASSWORD = 12


def bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=400, detail=detail)


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def password_problem(password: str) -> Optional[str]:
    if len(password) < MIN_PASSWORD:
        return f"Password must be at least {MIN_PASSWORD} characters long."
    if not COMPLEXITY_RE.search(password):
        return "Password must include uppercase, lowercase, numbers and special characters."
    return None


def registration_problem(username: str, email: str, password: str) -> Optional[str]:
    if len(username) < MIN_REGISTER_USERNAME:
        return f"Username must be at least {MIN_REGISTER_USERNAME} characters long."
    if not is_valid_email(email):
        return "Please enter a valid email address."
    return password_problem(password)


def check_password(password: str) -> None:
    problem = password_problem(password)
    if problem:
        raise bad_request(problem)


def check_email(email: Optional[str]) -> None:
    if not is_valid_email(email):
        raise bad_request("Invalid email address.")
