"""
Local session API. NOT authentication: no password or token is checked.
Signing in only selects which favorites namespace this device sees.

GET  /v1/auth/me        Current session user (if any)
POST /v1/auth/sign-in   Start a local session for an email
POST /v1/auth/sign-out  End the local session
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from .schemas import UserOut
from ..core.dependencies import get_session_context, get_suggestion_session
from ..orchestrator.suggestion_session import SuggestionSession
from ..services.session_context import SessionContext

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["auth"])


class SignInRequest(BaseModel):
    email: str = Field(min_length=1)
    name: Optional[str] = None
    # Accepted for form compatibility; never read.
    password: Optional[str] = None


def _user_out(ctx: SessionContext) -> UserOut:
    return UserOut(signed_in=ctx.user is not None, user=ctx.user, namespace=ctx.namespace)


@auth_router.get("/me", response_model=UserOut)
async def me(ctx: SessionContext = Depends(get_session_context)):
    return _user_out(ctx)


@auth_router.post("/sign-in", response_model=UserOut)
async def sign_in(
    request: SignInRequest,
    ctx: SessionContext = Depends(get_session_context),
):
    try:
        await ctx.sign_in(request.email, request.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _user_out(ctx)


@auth_router.post("/sign-out", response_model=UserOut)
async def sign_out(
    ctx: SessionContext = Depends(get_session_context),
    session: SuggestionSession = Depends(get_suggestion_session),
):
    await ctx.sign_out()
    session.reset()
    return _user_out(ctx)
