from typing import List

from fastapi import APIRouter, Depends

from ..auth.security import create_session_token, get_current_session, require_superadmin
from ..schemas.account import ProfileForm, ProfileSaved
from ..schemas.records import UserPublic
from ..services import accounts
from ..storage.gateway import PersistenceGateway, get_gateway


router = APIRouter(prefix="/account", tags=["account"])


@router.put("/me", response_model=ProfileSaved)
def update_my_profile(form: ProfileForm, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(get_current_session)):
    updated = accounts.update_account(gateway, user, user.id, form).public()
    return ProfileSaved(user=updated, access_token=create_session_token(updated))


@router.get("/users", response_model=List[UserPublic])
def list_users(gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_superadmin)):
    return accounts.list_directory(gateway, user)


@router.post("/users", response_model=UserPublic, status_code=201)
def create_user(form: ProfileForm, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_superadmin)):
    return accounts.create_account(gateway, user, form).public()


@router.put("/users/{user_id}", response_model=ProfileSaved)
def update_user(user_id: str, form: ProfileForm, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_superadmin)):
    updated = accounts.update_account(gateway, user, user_id, form).public()
    token = create_session_token(updated) if user_id == user.id else None
    return ProfileSaved(user=updated, access_token=token)


@router.delete("/users/{user_id}")
def delete_user(user_id: str, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_superadmin)):
    accounts.delete_account(gateway, user, user_id)
    return {"message": "User deleted successfully"}
