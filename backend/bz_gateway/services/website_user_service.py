"""Website User Service — CRUD, search, password login and phone (OTP) find-or-create.

Invariants:
    - Email and phone uniqueness is enforced by the database; violations surface as ConflictError
    - Passwords are hashed before they reach the session (infrastructure/passwords.py)
    - Only active users can log in with a password
    - OTP users are keyed by phone; first login creates them with "<phone>@phone.local"

Design Decisions:
    - Service owns commit/rollback: routes stay free of transaction handling
    - Listing and search share one paginated query builder
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bz_gateway.core.domain_types import ErrorCode, UserRole
from bz_gateway.core.errors import ConflictError, ResourceNotFoundError
from bz_gateway.infrastructure.passwords import hash_password, verify_password
from bz_gateway.models.website_user import WebsiteUser
from bz_gateway.schemas.website_user import WebsiteUserCreate, WebsiteUserUpdate

logger = logging.getLogger(__name__)

PHONE_EMAIL_DOMAIN = "phone.local"


def phone_email(phone: str) -> str:
    return f"{phone}@{PHONE_EMAIL_DOMAIN}"


class WebsiteUserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, data: WebsiteUserCreate) -> WebsiteUser:
        values = data.model_dump()
        if values.get("password"):
            values["password"] = hash_password(values["password"])
        user = WebsiteUser(**values)
        self.db.add(user)
        await self._commit("Email or phone already registered")
        await self.db.refresh(user)
        logger.info(f"Created website user {user.id}")
        return user

    async def list_users(self, page: int, limit: int) -> tuple[list[WebsiteUser], int]:
        return await self._paginate(select(WebsiteUser), page, limit)

    async def search_users(
        self, term: str, page: int, limit: int,
    ) -> tuple[list[WebsiteUser], int]:
        """Case-insensitive substring match on first name, last name and email."""
        pattern = f"%{term}%"
        query = select(WebsiteUser).where(or_(
            WebsiteUser.first_name.ilike(pattern),
            WebsiteUser.last_name.ilike(pattern),
            WebsiteUser.email.ilike(pattern),
        ))
        return await self._paginate(query, page, limit)

    async def get_user(self, user_id: UUID) -> WebsiteUser:
        user = await self.db.get(WebsiteUser, user_id)
        if not user:
            raise ResourceNotFoundError(
                "Website user", str(user_id), ErrorCode.USER_NOT_FOUND,
            )
        return user

    async def update_user(self, user_id: UUID, data: WebsiteUserUpdate) -> WebsiteUser:
        user = await self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("password"):
            changes["password"] = hash_password(changes["password"])
        if changes.get("email"):
            changes["email"] = changes["email"].strip().lower()
        for key, value in changes.items():
            setattr(user, key, value)
        await self._commit("Email or phone already registered")
        await self.db.refresh(user)
        return user

    async def delete_user(self, user_id: UUID) -> bool:
        user = await self.db.get(WebsiteUser, user_id)
        if not user:
            return False
        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"Deleted website user {user_id}")
        return True

    async def count_active(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(WebsiteUser).where(
                WebsiteUser.is_active.is_(True),
            ),
        )
        return result.scalar_one()

    async def authenticate(self, email: str, password: str) -> WebsiteUser | None:
        result = await self.db.execute(
            select(WebsiteUser).where(
                WebsiteUser.email == email.strip().lower(),
                WebsiteUser.is_active.is_(True),
            ),
        )
        user = result.scalar_one_or_none()
        if not user:
            logger.warning("Login attempt for unknown or inactive account")
            return None
        if not verify_password(password, user.password):
            logger.warning(f"Invalid password for user {user.id}")
            return None
        return user

    async def record_login(
        self, user: WebsiteUser, ip: str | None, user_agent: str | None,
    ) -> None:
        user.last_login_at = datetime.now(timezone.utc)
        user.last_login_ip = ip
        user.user_agent = user_agent
        await self.db.commit()

    async def find_or_create_by_phone(self, phone: str, name: str) -> WebsiteUser:
        result = await self.db.execute(
            select(WebsiteUser).where(WebsiteUser.phone == phone),
        )
        user = result.scalar_one_or_none()
        if user:
            return user

        user = WebsiteUser(
            first_name=name,
            last_name="",
            phone=phone,
            email=phone_email(phone),
            is_active=True,
            is_phone_verified=True,
            role=UserRole.USER.value,
        )
        self.db.add(user)
        await self._commit("Phone already registered")
        await self.db.refresh(user)
        logger.info(f"Created website user {user.id} from OTP login")
        return user

    # ─── Internals ───────────────────────────────────────────────

    async def _paginate(
        self, query: Select, page: int, limit: int,
    ) -> tuple[list[WebsiteUser], int]:
        total_result = await self.db.execute(
            select(func.count()).select_from(query.subquery()),
        )
        rows = await self.db.execute(
            query.order_by(WebsiteUser.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit),
        )
        return list(rows.scalars().all()), total_result.scalar_one()

    async def _commit(self, conflict_message: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Unique constraint hit: {e.orig}")
            raise ConflictError(conflict_message) from None


def public_user(user: WebsiteUser) -> dict[str, Any]:
    """Short user block returned alongside tokens."""
    return {
        "id": str(user.id),
        "email": user.email,
        "phone": user.phone,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "role": user.role or UserRole.USER.value,
    }


def token_claims(user: WebsiteUser) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "role": user.role,
    }
