from datetime import timedelta
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from mediroster.core.config import settings
from mediroster.core.logger import get_logger
from mediroster.core.security import verify_password, create_access_token
from mediroster.db.models import User
from mediroster.schemas.auth import LoginRequest, LoginResponse, UserInfo

logger = get_logger("auth")

class AuthService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def login(self, login_data: LoginRequest) -> LoginResponse:
        stmt = select(User).where(User.username == login_data.username)
        result = await self.session.execute(stmt)
        user = result.scalars().first()

        if not user or not verify_password(login_data.password, user.password_hash):
            logger.warning(f"Failed login for {login_data.username}")
            raise HTTPException(status_code=401, detail="Invalid username or password")

        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(
            data={"sub": str(user.id), "role": user.role}, expires_delta=access_token_expires
        )

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            user=UserInfo(id=user.id, name=user.name, role=user.role),
        )
