from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from clearhead.core.db import get_session
from clearhead.core.security import get_principal, Principal
from clearhead.modules.accounts.schemas import SignupIn, ProfileOut, AccountDeletedOut
from clearhead.modules.accounts.service import AccountService

router = APIRouter()

def svc(s: AsyncSession = Depends(get_session)) -> AccountService: return AccountService(s)

@router.post("/accounts/signup", response_model=ProfileOut)
async def signup(payload: SignupIn, principal: Principal = Depends(get_principal), service: AccountService = Depends(svc)):
    return await service.on_signup(principal, payload.first_name, payload.display_name)

@router.delete("/accounts/me", response_model=AccountDeletedOut)
async def delete_me(principal: Principal = Depends(get_principal), service: AccountService = Depends(svc)):
    n = await service.delete_account(principal.user_id)
    return {"user_id": principal.user_id, "cancelled_bookings": n}
