"""Account Schemas - Pydantic models for register, login and balance.

Invariants:
    - name and password are required, non-blank (stripped name)
    - password fits bcrypt: at most 72 bytes of UTF-8, not 72 characters
    - AddBalanceRequest accepts any integer: the negative check lives in core/ledger.py
      so it maps to InvalidArgumentError like every other caller
"""

from pydantic import BaseModel, Field, field_validator

from marketplace.core.domain_types import MAX_ID
from marketplace.infrastructure.credentials import MAX_PASSWORD_BYTES, password_too_long


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("password")
    @classmethod
    def fit_bcrypt_limit(cls, v: str) -> str:
        if password_too_long(v):
            raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return v


class RegisterResponse(BaseModel):
    id: int
    name: str


class LoginRequest(BaseModel):
    user_id: int = Field(ge=1, le=MAX_ID)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    id: int
    name: str
    token: str


class AddBalanceRequest(BaseModel):
    balance: int


class BalanceResponse(BaseModel):
    balance: int
