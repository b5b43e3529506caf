from fastapi import APIRouter

from src.autobuilder.api.v1 import ai, auth, blockchain, health, projects, templates, users

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(templates.router)
api_router.include_router(ai.router)
api_router.include_router(blockchain.router)
