# backend-server/app/api/v1/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db import crud, session
from app.core import security
from app.schemas import user as user_schema

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=user_schema.LoginResponse)
def login(credentials: user_schema.LoginRequest, db: Session = Depends(session.get_db)):
    user = crud.get_user_by_username(db, credentials.username)
    if not user or not security.verify_password(credentials.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = security.create_access_token(data={"sub": user.username})
    return user_schema.LoginResponse(
        id=user.id, username=user.username, email=user.email, name=user.name,
        avatar=user.avatar, access_token=access_token,
    )

@router.post("/register", response_model=user_schema.User, status_code=status.HTTP_201_CREATED)
def register(user_in: user_schema.UserCreate, db: Session = Depends(session.get_db)):
    if crud.get_user_by_username(db, user_in.username):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

    db_user = crud.create_user(
        db, username=user_in.username, hashed_password=security.get_password_hash(user_in.password),
        email=user_in.email, name=user_in.name, avatar=user_in.avatar,
    )
    logger.info("Registered user '%s'", db_user.username)
    return db_user
