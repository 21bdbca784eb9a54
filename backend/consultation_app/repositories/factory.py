# backend/consultation_app/repositories/factory.py
"""
Repository Factory for the consultation service.

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .conflict_checker_repository import ConflictCheckerRepository
    from .consultation_repository import ConsultationRepository
    from .consultation_request_repository import ConsultationRequestRepository
    from .maintenance_repository import MaintenanceRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_consultation_request_repository(db: Session) -> "ConsultationRequestRepository":
        """Create repository for pending consultation requests."""
        from .consultation_request_repository import ConsultationRequestRepository

        return ConsultationRequestRepository(db)

    @staticmethod
    def create_conflict_checker_repository(db: Session) -> "ConflictCheckerRepository":
        """Create repository for conflict checking queries."""
        from .conflict_checker_repository import ConflictCheckerRepository

        return ConflictCheckerRepository(db)

    @staticmethod
    def create_maintenance_repository(db: Session) -> "MaintenanceRepository":
        """Create repository for maintenance windows."""
        from .maintenance_repository import MaintenanceRepository

        return MaintenanceRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        """Create repository for account availability."""
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_consultation_repository(db: Session) -> "ConsultationRepository":
        """Create repository for confirmed consultations."""
        from .consultation_repository import ConsultationRepository

        return ConsultationRepository(db)
