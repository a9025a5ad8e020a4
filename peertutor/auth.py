# peertutor/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import settings
from .errors import NotFoundError
from .schemas import CurrentTutor
from .store import TutorStore, get_store

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or settings.token_expire_minutes)
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def authenticate(store: TutorStore, tutor_id: str, password: str) -> bool:
    hashed = store.get_password_hash(tutor_id)
    return hashed is not None and verify_password(password, hashed)


def get_current_tutor(
    token: str = Depends(oauth2_scheme),
    store: TutorStore = Depends(get_store),
) -> CurrentTutor:
    credentials_error = HTTPException(
        status_code=401,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        tutor_id = payload.get("sub")
        if tutor_id is None:
            raise credentials_error
    except JWTError:
        raise credentials_error

    try:
        tutor = store.get_tutor(tutor_id)
    except NotFoundError:
        raise credentials_error

    return CurrentTutor(id=tutor.id, name=tutor.name, is_admin=tutor.is_admin)
