from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blogful.database import get_db
from blogful.dependencies import require_fields, updated_fields, valid_id
from blogful.models import User
from blogful.sanitize import clean_text
from blogful.schemas import UserCreate, UserUpdate
from blogful.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


def serialize_user(user: User) -> dict:
    # The password hash never leaves the service layer.
    return {
        "id": user.id,
        "fullname": clean_text(user.fullname),
        "username": clean_text(user.username),
        "nickname": clean_text(user.nickname),
        "date_created": user.date_created,
    }


async def user_or_404(user_id: int, db: AsyncSession = Depends(get_db)) -> User:
    user = await user_service.get_user_by_id(db, user_id) if valid_id(user_id) else None
    if user is None:
        raise HTTPException(status_code=404, detail="User does not exist")
    return user


@router.get("")
async def list_users(db: AsyncSession = Depends(get_db)):
    users = await user_service.get_all_users(db)
    return [serialize_user(u) for u in users]


@router.post("", status_code=201)
async def create_user(
    response: Response,
    data: UserCreate | None = None,
    db: AsyncSession = Depends(get_db),
):
    data = data or UserCreate()
    new_user = {"fullname": data.fullname, "username": data.username}
    require_fields(new_user)
    new_user["nickname"] = data.nickname
    new_user["password"] = data.password

    user = await user_service.insert_user(db, new_user)
    response.headers["Location"] = f"{router.prefix}/{user.id}"
    return serialize_user(user)


@router.get("/{user_id}")
async def get_user(user: User = Depends(user_or_404)):
    return serialize_user(user)


@router.delete("/{user_id}", status_code=204)
async def delete_user(user: User = Depends(user_or_404), db: AsyncSession = Depends(get_db)):
    await user_service.delete_user_by_id(db, user.id)


@router.patch("/{user_id}", status_code=204)
async def update_user(
    data: UserUpdate | None = None,
    user: User = Depends(user_or_404),
    db: AsyncSession = Depends(get_db),
):
    data = data or UserUpdate()
    fields = updated_fields({
        "fullname": data.fullname,
        "username": data.username,
        "nickname": data.nickname,
        "password": data.password,
    })
    await user_service.update_user_by_id(db, user.id, fields)
