# gatekeeper/api/pages.py

import random
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from gatekeeper.core.sessions import Session, get_session
from gatekeeper.views import render


router = APIRouter()

MEMBER_IMAGES = (
    "meme1.svg",
    "meme2.svg",
    "meme3.svg",
)


@router.get("/")
def home(request: Request, session: Session = Depends(get_session)):
    return render(request, "home.html", session=session)


@router.get("/members")
def members(request: Request, session: Session = Depends(get_session)):
    """
    Gated page: only served to authenticated sessions.
    Shows one of MEMBER_IMAGES, picked at random on every request.
    """
    if not session.authenticated:
        return RedirectResponse("/", status_code=status.HTTP_302_FOUND)

    image = random.choice(MEMBER_IMAGES)
    return render(request, "members.html", session=session, image=image)
