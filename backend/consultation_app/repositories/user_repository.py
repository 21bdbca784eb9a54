# backend/consultation_app/repositories/user_repository.py
"""
User Repository for the consultation service.

Answers whether an account can still take part in a consultation and locks
the accounts of a booking; account management is handled elsewhere.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import UserAccount
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[UserAccount]):
    """Repository for account availability lookups."""

    def __init__(self, db: Session):
        super().__init__(db, UserAccount)

    def find_user_info_if_available(self, user_account_id: int) -> Optional[UserAccount]:
        """
        Return the account if it exists and is not disabled.

        Args:
            user_account_id: Account to look up

        Returns:
            The account, or None when it is missing or disabled
        """
        try:
            return (
                self.db.query(UserAccount)
                .filter(
                    UserAccount.user_account_id == user_account_id,
                    UserAccount.disabled_at.is_(None),
                )
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting user {user_account_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve user account: {str(e)}") from e

    def lock_user_accounts(self, user_account_ids: List[int]) -> List[UserAccount]:
        """
        Lock the given accounts (SELECT ... FOR UPDATE) in id order.

        Acceptances touching the same party serialise on these rows, so a
        count run after the lock sees consultations committed by the other.
        """
        try:
            return (
                self.db.query(UserAccount)
                .filter(UserAccount.user_account_id.in_(sorted(set(user_account_ids))))
                .order_by(UserAccount.user_account_id)
                .with_for_update()
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error locking users {user_account_ids}: {str(e)}")
            raise RepositoryException(f"Failed to lock user accounts: {str(e)}") from e
