from fastapi import APIRouter

from src.hotel.api.v1 import admin, auth, hall, inbox, messages, realtime, rooms, users, visits

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(rooms.router)
api_router.include_router(visits.router)
api_router.include_router(messages.router)
api_router.include_router(hall.router)
api_router.include_router(inbox.router)
api_router.include_router(admin.router)
api_router.include_router(realtime.router)
