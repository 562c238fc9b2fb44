from typing import Optional

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from mediroster.core.logger import get_logger
from mediroster.core.security import get_password_hash
from mediroster.db.models import User

logger = get_logger("users")

ROLES = ("admin", "doctor", "receptionist")

class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(
        self,
        username: str,
        password: str,
        name: str,
        role: str = "admin",
        email: Optional[str] = None,
    ) -> User:
        if role not in ROLES:
            raise HTTPException(status_code=400, detail=f"Unknown role: {role}")

        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        if result.scalars().first():
            raise HTTPException(status_code=409, detail="Username already taken")

        user = User(
            username=username,
            name=name,
            role=role,
            email=email,
            password_hash=get_password_hash(password),
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info(f"Created {role} user {username}")
        return user
