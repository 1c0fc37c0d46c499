# gatekeeper/api/auth.py

import logging
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DbSession
from gatekeeper.core.security import InvalidLoginInput, hash_password, validate_login, verify_password
from gatekeeper.core.sessions import Session, get_session
from gatekeeper.database import get_db
from gatekeeper.models.user import User
from gatekeeper.views import render, render_message


logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------------
# User store operations
# -------------------------------

def create_user(db: DbSession, username: str, email: str, password: str) -> User:
    user = User(username=username, email=email, password=hash_password(password))
    db.add(user)
    db.commit()
    return user


def find_user_by_email(db: DbSession, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: DbSession, email: str, password: str) -> User | None:
    user = find_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        return None
    return user


# -------------------------------
# Signup
# -------------------------------

@router.get("/signup")
def signup_page(request: Request, missingFields: str | None = None):
    return render(request, "signup.html", missing_fields=bool(missingFields))


@router.post("/createUser")
def create_user_submit(
    request: Request,
    username: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    db: DbSession = Depends(get_db)
):
    if not username or not email or not password:
        return RedirectResponse("/signup?missingFields=1", status_code=status.HTTP_302_FOUND)

    try:
        create_user(db, username, email, password)
    except IntegrityError:
        db.rollback()
        logger.warning("Signup rejected, email already registered: %s", email)
        return render_message(request, "Error creating user.", status.HTTP_409_CONFLICT)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving user %s", email)
        return render_message(request, "Error creating user.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info("Created user %s", email)
    return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)


# -------------------------------
# Login / Logout
# -------------------------------

@router.get("/login")
def login_page(request: Request):
    return render(request, "login.html")


@router.post("/loginUser")
def login_submit(
    request: Request,
    email: str | None = Form(None),
    password: str | None = Form(None),
    session: Session = Depends(get_session),
    db: DbSession = Depends(get_db)
):
    try:
        validate_login(email, password)
    except InvalidLoginInput:
        return PlainTextResponse("Invalid login input", status_code=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(db, email, password)
    except SQLAlchemyError:
        logger.exception("Error looking up user %s", email)
        return render_message(request, "Error logging in.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    if not user:
        logger.info("Failed login for %s", email)
        return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)

    session.authenticate(username=user.username, email=user.email)
    logger.info("User %s logged in", user.email)
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


@router.get("/logout")
def logout(request: Request, session: Session = Depends(get_session)):
    store = request.app.state.session_store
    email = session.email
    try:
        store.destroy(session)
    except SQLAlchemyError:
        logger.exception("Error destroying session")
        return render_message(request, "Error logging out.", status.HTTP_500_INTERNAL_SERVER_ERROR)

    if email:
        logger.info("User %s logged out", email)
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)
