from typing import Optional

from .records import Record, UserPublic, UserRole


class ProfileForm(Record):
    username: str = ""
    email: str = ""
    # Left out on edit keeps the stored full name
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    # Blank keeps the stored password when editing
    password: str = ""
    confirm_password: str = ""


class ProfileSaved(Record):
    user: UserPublic
    # Reissued session token when the caller edited their own record
    access_token: Optional[str] = None
