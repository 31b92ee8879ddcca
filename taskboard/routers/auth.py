from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models.user import User
from taskboard.schemas.user import UserCreate, UserLogin, UserOut
from taskboard.schemas.tokens import Token
from taskboard.services import task_store
from taskboard.utils.access import role_label
from taskboard.utils.auth import get_current_user
from taskboard.utils.security import hash_password, verify_password, create_access_token

router = APIRouter()


def user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        full_name=user.profile.full_name if user.profile else None,
        role=user.role,
        role_label=role_label(user.role),
        is_active=user.is_active,
        created_at=user.created_at,
    )


def _token_for(user: User) -> dict:
    token = create_access_token(data={"sub": user.email})
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": user_out(user),
    }


def _authenticate(db: Session, email: str, password: str) -> User:
    db_user = db.query(User).filter(User.email == email.lower()).first()
    if not db_user or not verify_password(password, db_user.hashed_password):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    if not db_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account has been deactivated. Please contact administrator."
        )
    return db_user


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(user: UserCreate, db: Session = Depends(get_db)):
    email = user.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = task_store.create_user(
        db,
        email=email,
        hashed_password=hash_password(user.password),
        full_name=user.full_name,
        role=user.role,
    )
    return _token_for(new_user)


@router.post("/login", response_model=Token)
def login(user: UserLogin, db: Session = Depends(get_db)):
    return _token_for(_authenticate(db, user.email, user.password))


@router.post("/token", response_model=Token)
def login_form(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """OAuth2 password flow, used by the interactive docs"""
    return _token_for(_authenticate(db, form_data.username, form_data.password))


@router.get("/me", response_model=UserOut)
def read_me(current_user: User = Depends(get_current_user)):
    return user_out(current_user)
