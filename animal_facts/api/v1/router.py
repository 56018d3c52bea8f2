from fastapi import APIRouter
import animal_facts.api.v1.routes.fact as fact

api_router = APIRouter()

api_router.include_router(
    fact.router,
    prefix="",
)
