from fastapi import APIRouter
from rumbo.api.endpoints import auth, test_results, user, vocational

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(user.router, prefix="/usuario", tags=["User"])
api_router.include_router(test_results.router, prefix="/tests", tags=["Tests"])
api_router.include_router(vocational.router, prefix="/vocacional", tags=["Vocational"])
