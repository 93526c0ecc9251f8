"""
Get user profile use case.

Retrieves the caller's record with role names, creating it on first sight.
"""

from dataclasses import dataclass

from greffier.application.services.record_reconciler import RecordReconciler
from greffier.domain.entities.user import User


@dataclass
class GetUserProfileCommand:
    """Command to get the profile of an authenticated subject."""

    subject_id: str


class GetUserProfile:
    """
    Use case for retrieving the current user's profile.

    Reads by external subject id first; a subject seen for the first time
    goes through full reconciliation.
    """

    def __init__(self, record_reconciler: RecordReconciler):
        """
        Initialize use case.

        Args:
            record_reconciler: Reconciler owning record resolution
        """
        self.record_reconciler = record_reconciler

    async def execute(self, command: GetUserProfileCommand) -> User:
        """
        Get user profile.

        Args:
            command: Command with subject_id

        Returns:
            User entity including roles
        """
        return await self.record_reconciler.refresh(command.subject_id)
