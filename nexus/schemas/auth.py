from .records import Record, UserPublic


class LoginRequest(Record):
    username: str
    password: str


class RegisterRequest(Record):
    username: str = ""
    email: str = ""
    password: str = ""
    full_name: str = ""


class SessionResponse(Record):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


class ForgotPasswordRequest(Record):
    email: str


class ForgotPasswordResponse(Record):
    email: str
    # Displayed to the requester; no mail channel is used
    code: str
    expires_in: int


class ResetPasswordRequest(Record):
    email: str
    code: str
    new_password: str
    confirm_password: str


class AdminHintRequest(Record):
    answer: str


class AdminHintResponse(Record):
    username: str
    password: str
    visible_for_seconds: int
