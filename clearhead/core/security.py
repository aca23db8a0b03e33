from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel
from clearhead.core.config import settings

http_bearer = HTTPBearer(auto_error=False)

LOCAL_USER_ID = "local-demo-user"

class Principal(BaseModel):
    user_id: str
    email: str | None = None
    name: str | None = None
    roles: list[str] = []

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles

def _decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG], audience=settings.REQUIRED_AUDIENCE)
        return payload
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}")

async def get_principal(creds: HTTPAuthorizationCredentials | None = Depends(http_bearer)) -> Principal:
    # In local/dev, allow missing token and act as a demo admin
    if creds is None and settings.ENV == "local":
        return Principal(user_id=LOCAL_USER_ID, email="demo@clearheadspace.local", roles=["admin"])
    if creds is None:
        raise HTTPException(status_code=401, detail="Missing token")

    data = _decode_token(creds.credentials)
    user_id = data.get("sub") or data.get("user_id") or data.get("uid")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token has no subject")
    return Principal(
        user_id=str(user_id),
        email=data.get("email"),
        name=data.get("name"),
        roles=data.get("roles", []),
    )

def require_roles(*needed: str):
    def dep(principal: Principal = Depends(get_principal)) -> Principal:
        if not set(needed).issubset(set(principal.roles)):
            raise HTTPException(status_code=403, detail="Insufficient role")
        return principal
    return dep
