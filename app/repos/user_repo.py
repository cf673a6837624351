from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.domain.enums import RecordStatus


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(
                UserModel.user_id == user_id,
                UserModel.status == RecordStatus.ACTIVE.value,
            )
        ).scalar_one_or_none()

    def get_by_phone(self, phone: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(
                UserModel.phone == phone,
                UserModel.status == RecordStatus.ACTIVE.value,
            )
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.commit()
        self.db.refresh(user)
        return user
