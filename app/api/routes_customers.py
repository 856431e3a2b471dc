from fastapi import APIRouter

from app.api.dependencies import AdminDep, StoreDep
from app.models.schemas import CustomerSummary
from app.services.customer_service import list_customers

router = APIRouter()


@router.get("/customers", response_model=list[CustomerSummary])
def get_customers(store: StoreDep, _admin: AdminDep) -> list[CustomerSummary]:
    """All customers with invoice count and last invoice time, ordered by name."""
    return list_customers(store)
