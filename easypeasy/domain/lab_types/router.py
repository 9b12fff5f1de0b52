"""Lab type router - FastAPI endpoints for lab type operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import LabType
from .schemas import LabTypeCreate, LabTypeResponse, LabTypeUpdate
from .service import LabTypeService

router = APIRouter(prefix="/lab-types", tags=["Lab Types"])


def get_lab_type_service(db: Session = Depends(get_db)) -> LabTypeService:
    """Dependency injection for LabTypeService"""
    return LabTypeService(db)


def to_response(lab_type: LabType, lab_count: int = 0) -> LabTypeResponse:
    return LabTypeResponse(
        id=lab_type.id,
        name=lab_type.name,
        code=lab_type.code,
        meetingCount=lab_type.meeting_count,
        notes=lab_type.notes,
        labCount=lab_count,
        created_at=lab_type.created_at,
    )


@router.get("", response_model=list[LabTypeResponse])
async def get_lab_types(service: LabTypeService = Depends(get_lab_type_service)):
    """Get all lab types ordered by name"""
    return [to_response(t, service.count_labs(t)) for t in service.get_lab_types()]


@router.get("/{lab_type_id}", response_model=LabTypeResponse)
async def get_lab_type(
    lab_type_id: int,
    service: LabTypeService = Depends(get_lab_type_service),
):
    lab_type = service.get_lab_type(lab_type_id)
    return to_response(lab_type, service.count_labs(lab_type))


@router.post("", response_model=LabTypeResponse, status_code=201)
async def create_lab_type(
    data: LabTypeCreate,
    service: LabTypeService = Depends(get_lab_type_service),
):
    return to_response(service.create_lab_type(data))


@router.patch("/{lab_type_id}", response_model=LabTypeResponse)
async def update_lab_type(
    lab_type_id: int,
    data: LabTypeUpdate,
    service: LabTypeService = Depends(get_lab_type_service),
):
    lab_type = service.update_lab_type(lab_type_id, data)
    return to_response(lab_type, service.count_labs(lab_type))


@router.delete("/{lab_type_id}")
async def delete_lab_type(
    lab_type_id: int,
    service: LabTypeService = Depends(get_lab_type_service),
):
    """Delete a lab type that no lab uses"""
    return service.delete_lab_type(lab_type_id)
