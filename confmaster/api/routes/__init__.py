from fastapi import APIRouter

from confmaster.api.routes import auth, conferences, documents, profile, reviews, submissions, users

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(profile.router)
api_router.include_router(conferences.router)
api_router.include_router(submissions.router)
api_router.include_router(reviews.router)
api_router.include_router(documents.router)
