from fastapi import APIRouter

from findata.api.v1.routes import auth, users, transactions, dashboard, categories

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(transactions.router)
api_router.include_router(dashboard.router)
api_router.include_router(categories.router)
