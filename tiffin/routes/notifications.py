"""
Notification Endpoints

    GET /api/notifications   notifications visible to the caller
"""

from typing import List

from fastapi import APIRouter, Depends

from tiffin.core.config import get_logger
from tiffin.dependencies import get_inbox, require_session
from tiffin.models import Session
from tiffin.schemas import NotificationOut
from tiffin.services.notifications import NotificationInbox

logger = get_logger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationOut])
async def list_notifications(
    session: Session = Depends(require_session),
    inbox: NotificationInbox = Depends(get_inbox),
) -> List[NotificationOut]:
    visible = inbox.list_for(session)
    logger.info(f"🔔 Fetching {len(visible)} notifications")
    return [NotificationOut.from_notification(n) for n in visible]
