"""
Account management.

Any user may edit their own record. The bootstrap admin (identified by
username, not by role) also browses the user directory and may create,
edit or delete any other account.

Duplicate checks re-read the whole users collection before every save; they
are not transactional.
"""
import enum
import uuid
from typing import List, Optional

from fastapi import HTTPException

from ..schemas.account import ProfileForm
from ..schemas.records import LogAction, User, UserPublic, UserRole
from ..storage.gateway import PersistenceGateway, utc_now_iso
from .audit import create_audit_log
from .validation import MIN_ADMIN_USERNAME, bad_request, check_email, check_password


def _forbidden() -> HTTPException:
    return HTTPException(status_code=403, detail="Forbidden")


def _validate_form(form: ProfileForm, creating: bool) -> None:
    check_email(form.email)
    if creating and not form.password:
        raise bad_request("A password is required for new users.")
    if form.password:
        if form.password != form.confirm_password:
            raise bad_request("Passwords do not match.")
        check_password(form.password)


def _check_duplicates(gateway: PersistenceGateway, form: ProfileForm, exclude_id: Optional[str]) -> None:
    users = [u for u in gateway.get_users() if u.id != exclude_id]
    if any(u.username.lower() == form.username.lower() for u in users):
        raise HTTPException(status_code=409, detail=f'The username "{form.username}" is already taken.')
    if any(u.email and u.email.lower() == form.email.lower() for u in users):
        raise HTTPException(status_code=409, detail=f'The email "{form.email}" is already registered to another account.')


def list_directory(gateway: PersistenceGateway, actor: UserPublic) -> List[UserPublic]:
    if not actor.is_superadmin:
        raise _forbidden()
    return [u.public() for u in gateway.get_users()]


def create_account(gateway: PersistenceGateway, actor: UserPublic, form: ProfileForm) -> User:
    if not actor.is_superadmin:
        raise _forbidden()
    _validate_form(form, creating=True)
    _check_duplicates(gateway, form, exclude_id=None)
    if len(form.username) < MIN_ADMIN_USERNAME:
        raise bad_request("The username is too short.")

    user = User(
        id=str(uuid.uuid4()),
        username=form.username,
        email=form.email,
        full_name=form.full_name or "",
        role=form.role or UserRole.USER,
        password=form.password,
        created_at=utc_now_iso(),
    )
    gateway.add_user(user)
    create_audit_log(gateway, LogAction.CREATE, f"Admin {actor.username} created user {user.username}", actor)
    return user


def update_account(gateway: PersistenceGateway, actor: UserPublic, target_id: str, form: ProfileForm) -> User:
    editing_self = target_id == actor.id
    if not editing_self and not actor.is_superadmin:
        raise _forbidden()
    if not form.username:
        raise bad_request("Username is required.")
    target = gateway.get_user(target_id)
    if target is None:
        raise HTTPException(status_code=404, detail="User not found")
    _validate_form(form, creating=False)
    _check_duplicates(gateway, form, exclude_id=target.id)

    updated = target.model_copy(update={
        "username": form.username,
        "full_name": target.full_name if form.full_name is None else form.full_name,
        "email": form.email,
        "role": form.role if (actor.is_superadmin and form.role) else target.role,
        "password": form.password or target.password,
    })
    gateway.update_user(updated)
    if editing_self:
        create_audit_log(gateway, LogAction.UPDATE, f"User updated their profile: {updated.username}", updated.public())
    else:
        create_audit_log(gateway, LogAction.UPDATE, f"Admin {actor.username} updated user {updated.username}", actor)
    return updated


def delete_account(gateway: PersistenceGateway, actor: UserPublic, target_id: str) -> None:
    if not actor.is_superadmin:
        raise _forbidden()
    if target_id == actor.id:
        raise HTTPException(status_code=409, detail="You cannot delete your own account from here.")
    if gateway.get_user(target_id) is None:
        raise HTTPException(status_code=404, detail="User not found")
    gateway.delete_user(target_id)
    create_audit_log(gateway, LogAction.DELETE, f"User deleted ID: {target_id}", actor)


class DialogMode(str, enum.Enum):
    viewing_self = "viewing-self"
    viewing_other = "viewing-other"
    creating_new = "creating-new"


class AccountDialog:
    """Server-side model of the account dialog.

    Holds the editing session over the account forms that clients render.

    Modes: viewing-self <-> viewing-other <-> creating-new. The last two are
    open to the bootstrap admin only. Every transition reloads the form from
    the selected record and hides both password fields again.
    """

    def __init__(self, gateway: PersistenceGateway, actor: UserPublic):
        self.gateway = gateway
        self.actor = actor
        self.view_self()

    def _reset(self, mode: DialogMode, target: Optional[UserPublic]) -> None:
        self.mode = mode
        self.target = target
        if target is None:
            self.form = ProfileForm(role=UserRole.USER)
        else:
            self.form = ProfileForm(
                username=target.username,
                email=target.email,
                full_name=target.full_name,
                role=target.role,
            )
        self.show_password = False
        self.show_confirm_password = False

    def view_self(self) -> None:
        self._reset(DialogMode.viewing_self, self.actor)

    def view_user(self, user_id: str) -> None:
        if user_id == self.actor.id:
            self.view_self()
            return
        if not self.actor.is_superadmin:
            raise _forbidden()
        user = self.gateway.get_user(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        self._reset(DialogMode.viewing_other, user.public())

    def start_create(self) -> None:
        if not self.actor.is_superadmin:
            raise _forbidden()
        self._reset(DialogMode.creating_new, None)

    def directory(self) -> List[UserPublic]:
        return list_directory(self.gateway, self.actor)

    def save(self) -> User:
        if self.mode == DialogMode.creating_new:
            user = create_account(self.gateway, self.actor, self.form)
            self.view_self()
            return user
        user = update_account(self.gateway, self.actor, self.target.id, self.form)
        if self.mode == DialogMode.viewing_self:
            self.actor = user.public()
            self.view_self()
        else:
            self._reset(DialogMode.viewing_other, user.public())
        return user

    def delete(self, user_id: str) -> None:
        delete_account(self.gateway, self.actor, user_id)
        if self.target is not None and self.target.id == user_id:
            self.view_self()
