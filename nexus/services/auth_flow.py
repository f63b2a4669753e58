"""
Login and self-registration against the users collection.
Both fetch the whole collection and scan it; there is no server-side query.
"""
import uuid

import structlog
from fastapi import HTTPException

from ..schemas.records import LogAction, User, UserRole
from ..storage.gateway import PersistenceGateway, utc_now_iso
from .audit import create_audit_log
from .validation import bad_request, registration_problem


def login(gateway: PersistenceGateway, username: str, password: str) -> User:
    users = gateway.get_users()
    user = next((u for u in users if u.username == username and u.password == password), None)
    if user is None:
        structlog.get_logger().info("login_failed", username=username)
        raise HTTPException(status_code=401, detail="Invalid credentials. Check your username and password.")
    create_audit_log(gateway, LogAction.LOGIN, f"User {user.username} logged in", user.public())
    return user


def register(gateway: PersistenceGateway, username: str, email: str, password: str, full_name: str) -> User:
    if not username or not password or not full_name or not email:
        raise bad_request("All fields are required.")
    problem = registration_problem(username, email, password)
    if problem:
        raise bad_request(problem)

    users = gateway.get_users()
    # Not transactional: two clients may pass this check at the same time
    if any(u.username == username for u in users):
        raise HTTPException(status_code=409, detail=f'The username "{username}" already exists. Try another one.')
    if any(u.email and u.email.lower() == email.lower() for u in users):
        raise HTTPException(status_code=409, detail=f'The email "{email}" is already registered.')

    user = User(
        id=str(uuid.uuid4()),
        username=username,
        email=email,
        password=password,
        full_name=full_name,
        role=UserRole.USER,
        created_at=utc_now_iso(),
    )
    gateway.add_user(user)
    structlog.get_logger().info("user_registered", user_id=user.id, username=username)
    return user
