from typing import List

from fastapi import APIRouter, Depends

from marketplace_api.core.auth import require_admin
from marketplace_api.database.mongo import get_db
from marketplace_api.models.user_models import RoleUpdate, UserResponse
from marketplace_api.services.user_service import change_role, list_users, set_ban_status

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=List[UserResponse])
@router.get("/all-users", response_model=List[UserResponse])
async def all_users(admin=Depends(require_admin), db=Depends(get_db)):
    return await list_users(db)


@router.put("/users/{user_id}")
@router.patch("/users/{user_id}")
@router.put("/change-role/{user_id}")
@router.patch("/change-role/{user_id}")
async def update_role(user_id: str, data: RoleUpdate, admin=Depends(require_admin), db=Depends(get_db)):
    user = await change_role(db, user_id, data.role)
    return {"message": "User role updated successfully", "user": UserResponse(**user)}


@router.patch("/ban-user/{user_id}")
async def ban_user(user_id: str, admin=Depends(require_admin), db=Depends(get_db)):
    await set_ban_status(db, user_id, banned=True)
    return {"message": "User banned successfully"}


@router.patch("/unban-user/{user_id}")
async def unban_user(user_id: str, admin=Depends(require_admin), db=Depends(get_db)):
    await set_ban_status(db, user_id, banned=False)
    return {"message": "User unbanned successfully"}
