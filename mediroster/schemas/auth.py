from pydantic import BaseModel
from uuid import UUID

class LoginRequest(BaseModel):
    username: str
    password: str

class UserInfo(BaseModel):
    id: UUID
    name: str
    role: str

class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    user: UserInfo
