# peertutor/routers/auth_routes.py

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm

from peertutor.auth import authenticate, create_access_token
from peertutor.schemas import Token
from peertutor.store import TutorStore, get_store

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    store: TutorStore = Depends(get_store),
):
    tutor_id = form_data.username

    if not authenticate(store, tutor_id, form_data.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": tutor_id})
    return {"access_token": token, "token_type": "bearer"}
