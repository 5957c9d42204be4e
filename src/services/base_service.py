"""
Base service layer for database-backed resources
"""

import logging
from typing import Any, List, Optional
from dataclasses import dataclass

from database.connection import Database

logger = logging.getLogger(__name__)

# Error types carried by ServiceResult
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
DATABASE_ERROR = "DATABASE_ERROR"


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Any]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


class BaseService:
    """Base service holding the injected database handle for one resource"""

    def __init__(self, db: Database, resource_name: str):
        self.db = db
        self.resource_name = resource_name

    def _ok(self, rows: List[Any]) -> ServiceResult:
        return ServiceResult(success=True, data=rows, count=len(rows))

    def _not_found(self, record_id: Any) -> ServiceResult:
        return ServiceResult(
            success=False,
            error=f"{self.resource_name} record not found: {record_id}",
            error_type=RESOURCE_NOT_FOUND
        )

    def _database_failure(self, operation: str, exc: Exception) -> ServiceResult:
        logger.error(f"{operation} operation failed for {self.resource_name}: {exc}", exc_info=True)
        return ServiceResult(
            success=False,
            error=f"Database operation failed: {exc}",
            error_type=DATABASE_ERROR
        )
