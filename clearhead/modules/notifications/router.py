from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.db import get_session
from clearhead.core.security import require_roles
from clearhead.modules.notifications.schemas import TemplateCreate, TemplateOut, SendMessage, OutboundOut
from clearhead.modules.notifications.service import NotificationsService

router = APIRouter(dependencies=[Depends(require_roles("admin"))])

def svc(s: AsyncSession = Depends(get_session)) -> NotificationsService: return NotificationsService(s)

@router.post("/notifications/templates", response_model=TemplateOut)
async def create_template(payload: TemplateCreate, service: NotificationsService = Depends(svc)):
    return await service.create_template(**payload.model_dump())

@router.post("/notifications/send", response_model=OutboundOut)
async def send_message(payload: SendMessage, service: NotificationsService = Depends(svc)):
    return await service.send(to=payload.to, kind=payload.kind, variables=payload.variables or {})
