# gatekeeper/core/security.py

from passlib.context import CryptContext
from pydantic import BaseModel, EmailStr, Field, ValidationError


BCRYPT_ROUNDS = 12
MIN_PASSWORD_LENGTH = 6

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


class InvalidLoginInput(ValueError):
    pass


class LoginForm(BaseModel):
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def validate_login(email: str | None, password: str | None) -> LoginForm:
    try:
        return LoginForm(email=email, password=password)
    except ValidationError as e:
        raise InvalidLoginInput(str(e)) from e
