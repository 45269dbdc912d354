"""
Admin Endpoints (ADMIN role only)

    GET /api/admin/stats
    GET /api/admin/users
    PUT /api/admin/users/{id}/toggle-status
"""

from typing import List

from fastapi import APIRouter, Depends

from tiffin.core.config import get_logger
from tiffin.dependencies import get_admin_service, require_roles
from tiffin.models import Role
from tiffin.schemas import AdminStats, SanitizedUser, ToggleStatusResponse, UserStatus
from tiffin.services.admin import AdminService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_roles(Role.ADMIN))],
)


@router.get("/stats", response_model=AdminStats)
async def admin_stats(admin: AdminService = Depends(get_admin_service)) -> AdminStats:
    logger.info("📊 Admin stats requested")
    return AdminStats(**admin.stats())


@router.get("/users", response_model=List[SanitizedUser])
async def admin_users(admin: AdminService = Depends(get_admin_service)) -> List[SanitizedUser]:
    logger.info("👥 Admin fetching all users")
    return [SanitizedUser(**u) for u in admin.list_users()]


@router.put("/users/{user_id}/toggle-status", response_model=ToggleStatusResponse)
async def toggle_user_status(
    user_id: int,
    admin: AdminService = Depends(get_admin_service),
) -> ToggleStatusResponse:
    user = admin.toggle_user_status(user_id)
    return ToggleStatusResponse(user=UserStatus(id=user.id, is_active=user.is_active))
