"""
API v1 router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.calculator import router as calculator_router
from api.v1.groups import router as groups_router
from api.v1.home import router as home_router
from api.v1.notes import router as notes_router
from api.v1.personal_notes import router as personal_notes_router
from api.v1.polls import router as polls_router
from api.v1.profile import router as profile_router
from api.v1.search import router as search_router
from api.v1.timetable import router as timetable_router

router = APIRouter()

router.include_router(profile_router, prefix="/profile", tags=["Profile"])
router.include_router(home_router, prefix="/home", tags=["Home"])
router.include_router(groups_router, prefix="/groups", tags=["Groups"])
router.include_router(notes_router, tags=["Sticky Notes"])
router.include_router(polls_router, tags=["Polls"])
router.include_router(search_router, prefix="/search", tags=["Search"])
router.include_router(personal_notes_router, prefix="/personal-notes", tags=["Personal Notes"])
router.include_router(timetable_router, prefix="/timetable", tags=["Timetable"])
router.include_router(calculator_router, prefix="/calculator", tags=["Calculator"])
