"""User directory repository implementation using SQLAlchemy"""

from typing import Optional, List
from sqlalchemy.orm import Session

from ...domain.repositories.user_repository import IUserRepository
from ...domain.entities.user import User
from ...domain.value_objects.email import Email
from ...domain.value_objects.entity_ids import UserId
from ...domain.enums import UserStatus, UserRole
from ..orm.user_model import UserModel


class UserRepositoryImpl(IUserRepository):
    """Repository implementation for User aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        """Get user by ID"""
        model = self.session.query(UserModel).filter(UserModel.id == user_id.value).first()
        return self._map_to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        model = self.session.query(UserModel).filter(UserModel.email == str(email)).first()
        return self._map_to_entity(model) if model else None

    async def exists(self, user_id: UserId) -> bool:
        return self.session.query(UserModel.id).filter(UserModel.id == user_id.value).first() is not None

    async def add(self, user: User) -> User:
        """Add a new user"""
        model = self._create_model_from_entity(user)
        self.session.add(model)
        self.session.flush()
        return user

    async def update(self, user: User) -> User:
        """Update an existing user"""
        existing = self.session.query(UserModel).filter(UserModel.id == user.id.value).first()
        if existing:
            self._update_model_from_entity(existing, user)
            self.session.flush()
        return user

    async def count_by_role(self, role: UserRole) -> int:
        return self.session.query(UserModel).filter(UserModel.role == role).count()

    async def list(
        self,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
    ) -> List[User]:
        """List directory entries, newest first"""
        query = self.session.query(UserModel)
        if role is not None:
            query = query.filter(UserModel.role == role)
        if status is not None:
            query = query.filter(UserModel.status == status)
        models = query.order_by(UserModel.created_at.desc()).all()
        return [self._map_to_entity(model) for model in models]

    def _create_model_from_entity(self, user: User) -> UserModel:
        """Create ORM model from domain entity"""
        return UserModel(
            id=user.id.value,
            email=str(user.email),
            display_name=user.display_name,
            phone_number=user.phone_number,
            role=user.role,
            status=user.status,
            artist_name=user.artist_name,
            bio=user.bio,
            social_media=user.social_media,
            permissions=user.permissions,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login=user.last_login,
            last_logout=user.last_logout
        )

    def _update_model_from_entity(self, model: UserModel, user: User) -> None:
        """Update ORM model from domain entity; role is immutable"""
        model.email = str(user.email)
        model.display_name = user.display_name
        model.phone_number = user.phone_number
        model.status = user.status
        model.artist_name = user.artist_name
        model.bio = user.bio
        model.social_media = user.social_media
        model.permissions = user.permissions
        model.is_active = user.is_active
        model.updated_at = user.updated_at
        model.last_login = user.last_login
        model.last_logout = user.last_logout

    def _map_to_entity(self, model: UserModel) -> User:
        """Map ORM model to domain entity"""
        return User(
            id=UserId(model.id),
            email=Email(model.email),
            display_name=model.display_name,
            role=UserRole(model.role),
            phone_number=model.phone_number,
            status=UserStatus(model.status or UserStatus.ACTIVE),
            artist_name=model.artist_name,
            bio=model.bio or "",
            social_media=dict(model.social_media or {}),
            permissions=list(model.permissions or []),
            is_active=model.is_active if model.is_active is not None else True,
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login=model.last_login,
            last_logout=model.last_logout
        )
