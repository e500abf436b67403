"""Account Routes - register, login, balance.

Invariants:
    - Routes never contain business logic: bind, delegate to AccountHandlers, shape the response
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.dependencies import get_authenticated_request
from marketplace.core.domain_types import AuthenticatedRequest, UserId
from marketplace.infrastructure.database import get_db
from marketplace.schemas.account import (
    AddBalanceRequest, BalanceResponse, LoginRequest, LoginResponse,
    RegisterRequest, RegisterResponse,
)
from marketplace.services.handle_account import AccountHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["accounts"])


@router.post("/register", response_model=RegisterResponse)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    user = await AccountHandlers(db).register(body.name, body.password)
    return RegisterResponse(id=user.id, name=user.name)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user, token = await AccountHandlers(db).login(UserId(body.user_id), body.password)
    return LoginResponse(id=user.id, name=user.name, token=token)


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    balance = await AccountHandlers(db).get_balance(auth)
    return BalanceResponse(balance=balance)


@router.post("/balance")
async def add_balance(
    body: AddBalanceRequest,
    auth: AuthenticatedRequest = Depends(get_authenticated_request),
    db: AsyncSession = Depends(get_db),
):
    await AccountHandlers(db).add_balance(auth, body.balance)
    return {"message": "successful"}
