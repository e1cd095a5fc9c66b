from fastapi import Request
from passlib.context import CryptContext


def build_password_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def get_password_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context
