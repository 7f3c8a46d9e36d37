import logging

from application.rest.schemas.output.common_output import ErrorResponse, HealthResponse
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from utils.dependencies import get_db

logger = logging.getLogger(__name__)
router = APIRouter()

SERVICE_NAME = "github-notes-service"


@router.get(
    path="/health",
    description="Health check endpoint for service monitoring and availability.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": HealthResponse,
            "description": "Service is healthy and operational.",
        },
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "model": HealthResponse,
            "description": "Database is unreachable.",
            "content": {
                "application/json": {
                    "example": {
                        "status": "unhealthy",
                        "service": SERVICE_NAME,
                        "database": "unavailable",
                    }
                }
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - service unavailable.",
        },
    },
)
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for service monitoring.

    Returns:
        HealthResponse: Service status, including database connectivity.

    Example:
        >>> response = await health_check(db)
        >>> print(response)
        HealthResponse(status="healthy", service="github-notes-service", database="ok")
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed, database unreachable: {str(e)}")
        body = HealthResponse(
            status="unhealthy", service=SERVICE_NAME, database="unavailable"
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump()
        )

    return HealthResponse(status="healthy", service=SERVICE_NAME, database="ok")
