# backend/consultation_app/repositories/__init__.py
"""
Repository Pattern Implementation for the consultation service.

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- RepositoryFactory: Factory for creating repository instances
- ConsultationRequestRepository: Pending requests, including the locked re-fetch
- ConflictCheckerRepository: Same-start-time counts per party and role
- MaintenanceRepository: Maintenance windows that have not ended yet
- UserRepository: Account availability
- ConsultationRepository: Consultation and awaiting-payment inserts

Usage:
    from consultation_app.repositories import RepositoryFactory

    repository = RepositoryFactory.create_conflict_checker_repository(db)
    count = repository.count_user_side_consultation(user_account_id, meeting_at)
"""

from .base_repository import BaseRepository
from .conflict_checker_repository import ConflictCheckerRepository
from .consultation_repository import ConsultationRepository
from .consultation_request_repository import ConsultationRequestRepository
from .factory import RepositoryFactory
from .maintenance_repository import MaintenanceRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ConflictCheckerRepository",
    "ConsultationRepository",
    "ConsultationRequestRepository",
    "MaintenanceRepository",
    "RepositoryFactory",
    "UserRepository",
]
