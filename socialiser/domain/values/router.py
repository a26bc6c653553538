"""Core value router - FastAPI endpoints for core values"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ValueCreate, ValueResponse, ValueUpdate
from .service import ValueService, serialize_value

router = APIRouter(prefix="/values", tags=["Values"])


def get_value_service(db: Session = Depends(get_db)) -> ValueService:
    """Dependency injection for ValueService"""
    return ValueService(db)


@router.get("", response_model=list[ValueResponse])
async def get_values(
    current_user: User = Depends(get_current_user),
    service: ValueService = Depends(get_value_service),
):
    return [serialize_value(v) for v in service.get_values(current_user)]


@router.post("", response_model=ValueResponse, status_code=201)
async def create_value(
    data: ValueCreate,
    current_user: User = Depends(get_current_user),
    service: ValueService = Depends(get_value_service),
):
    return serialize_value(service.create_value(data, current_user))


@router.put("/{value_id}", response_model=ValueResponse)
async def update_value(
    value_id: int,
    data: ValueUpdate,
    current_user: User = Depends(get_current_user),
    service: ValueService = Depends(get_value_service),
):
    return serialize_value(service.update_value(value_id, data, current_user))


@router.delete("/{value_id}")
async def delete_value(
    value_id: int,
    current_user: User = Depends(get_current_user),
    service: ValueService = Depends(get_value_service),
):
    return service.delete_value(value_id, current_user)
