"""Current-service endpoint."""
from fastapi import APIRouter
from churchdash.api.schemas.service import ServiceInfoRead
from churchdash.services.attendance_service import current_service, service_info_read

router = APIRouter(prefix="/service", tags=["service"])


@router.get("", response_model=ServiceInfoRead)
def get_service() -> ServiceInfoRead:
    return service_info_read(current_service())
