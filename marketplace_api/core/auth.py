from typing import Callable, List, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from marketplace_api.core.config import get_settings
from marketplace_api.core.errors import Forbidden, Unauthenticated
from marketplace_api.core.security import InvalidToken, decode_token
from marketplace_api.database.mongo import get_db
from marketplace_api.models.user_models import Role
from marketplace_api.services.user_service import resolve_account

bearer_scheme = HTTPBearer(auto_error=False)

Gate = Callable[[dict, Optional[str]], Optional[HTTPException]]


async def get_current_user(
    cred: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db=Depends(get_db),
    settings=Depends(get_settings),
):
    """Porte d'authentification puis d'identité.

    Le compte est relu en base à chaque requête : le rôle et le statut
    contenus dans le token ne sont jamais utilisés.
    """
    token_value = (cred and cred.credentials) or None
    if not token_value:
        raise Unauthenticated("Authentication required")
    try:
        payload = decode_token(token_value, settings)
    except InvalidToken:
        raise Unauthenticated("Invalid or expired token")
    return await resolve_account(db, payload["sub"])


def role_gate(account: dict, required_role: Optional[str]) -> Optional[HTTPException]:
    if required_role is not None and account.get("role") != required_role:
        return Forbidden(f"Access denied: {required_role} role required")
    return None


def ban_gate(account: dict, required_role: Optional[str] = None) -> Optional[HTTPException]:
    if account.get("status") == "banned":
        return Forbidden("Account is banned")
    return None


def run_gates(account: dict, gates: List[Gate], required_role: Optional[str] = None) -> dict:
    for gate in gates:
        rejection = gate(account, required_role)
        if rejection is not None:
            raise rejection
    return account


def require(role: Optional[Role] = None, check_ban: bool = False):
    """Construit la dépendance d'une route : rôle requis puis bannissement."""
    gates: List[Gate] = [role_gate]
    if check_ban:
        gates.append(ban_gate)

    async def dependency(user=Depends(get_current_user)):
        return run_gates(user, gates, role)

    return dependency


require_admin = require("admin")
require_seller = require("seller")
require_buyer = require("buyer", check_ban=True)
require_active_user = require(check_ban=True)
