from fastapi import APIRouter, Depends

from app.db.database import Database, get_db
from app.schemas.user import UserCreate, UserRead
from app.services import user_service

router = APIRouter(prefix="/user", tags=["user"])


@router.get("", response_model=list[UserRead])
async def list_users(db: Database = Depends(get_db)):
    return await user_service.get_users(db)


@router.post("", response_model=UserRead, status_code=201)
async def add_user(request: UserCreate, db: Database = Depends(get_db)):
    return await user_service.create_user(db, request)
