from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mediroster.api.deps import get_current_user
from mediroster.db.models import User
from mediroster.db.session import get_session
from mediroster.schemas.auth import LoginRequest, LoginResponse, UserInfo
from mediroster.services.auth_service import AuthService

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    session: AsyncSession = Depends(get_session)
):
    service = AuthService(session)
    return await service.login(login_data)

@router.get("/me", response_model=UserInfo)
async def read_me(current_user: User = Depends(get_current_user)):
    return UserInfo(id=current_user.id, name=current_user.name, role=current_user.role)
