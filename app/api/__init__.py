"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every endpoint into a single router
for inclusion in the FastAPI application.

Included routers:
    - auth: 로그인 및 현재 사용자 (Login and current principal)
    - clients: 고객 관리 (Client management)
"""

from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.clients import router as clients_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(clients_router, prefix="/clients", tags=["Clients"])
