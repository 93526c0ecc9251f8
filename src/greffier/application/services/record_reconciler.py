"""
Record Reconciler - one canonical user record per external subject.
"""

from greffier.domain.entities.user import User
from greffier.domain.exceptions import InconsistencyError, UnauthenticatedError
from greffier.domain.repositories.i_user_repository import IUserRepository
from greffier.domain.value_objects.write_outcome import UniqueConflict
from greffier.infrastructure.monitoring import metrics
from greffier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class RecordReconciler:
    """
    Ensure exactly one user record exists for a subject identifier.

    Business rules:
    - A single insert-or-update keyed on the subject id is the happy path
      for both first-seen and returning subjects
    - A uniqueness conflict means another writer got there first (or a
      historical record owns the subject id); the record is then read by
      external subject id
    - If that read finds nothing the store is inconsistent; fail, never loop
    - Callers never see which path ran
    """

    def __init__(self, user_repository: IUserRepository):
        """
        Initialize reconciler with dependencies.

        Args:
            user_repository: Repository for user persistence
        """
        self.user_repository = user_repository

    async def resolve(self, subject_id: str) -> User:
        """
        Resolve a subject identifier to its canonical user record.

        Args:
            subject_id: Pre-verified identifier from the auth provider

        Returns:
            Canonical User entity (created on first sight)

        Raises:
            UnauthenticatedError: If subject_id is empty
            InconsistencyError: If the fallback lookup finds no record
        """
        if not subject_id or not subject_id.strip():
            raise UnauthenticatedError("No external subject identifier supplied")

        outcome = await self.user_repository.upsert_by_id(subject_id)

        if not isinstance(outcome, UniqueConflict):
            metrics.reconciliations_total.labels(path="upsert").inc()
            return outcome.user

        logger.info(
            f"Upsert for subject {subject_id} hit unique {outcome.field.value}, "
            f"reading existing record",
            extra={"subject_id": subject_id, "field": outcome.field.value},
        )

        user = await self.user_repository.get_by_external_subject_id(subject_id)
        if user is None:
            logger.error(
                f"Unique conflict on {outcome.field.value} for subject "
                f"{subject_id} but no record carries that subject id",
                extra={"subject_id": subject_id, "field": outcome.field.value},
            )
            raise InconsistencyError("user reconciliation")

        metrics.reconciliations_total.labels(path="fallback").inc()
        return user

    async def refresh(self, subject_id: str) -> User:
        """
        Re-read the canonical record, correcting identifier drift.

        The record addressed by external subject id is authoritative.
        When none exists, ``resolve`` either repairs the record addressed
        by ``id`` (its upsert rewrites external_subject_id) or creates it.

        Args:
            subject_id: Pre-verified identifier from the auth provider

        Returns:
            Current canonical User entity
        """
        user = await self.user_repository.get_by_external_subject_id(subject_id)

        if user is None:
            return await self.resolve(subject_id)

        if user.has_identity_drift:
            metrics.identity_drift_total.inc()
            logger.warning(
                f"Identity drift: record {user.id} holds subject {subject_id}, "
                f"using it as authoritative",
                extra={"user_id": user.id, "subject_id": subject_id},
            )

        return user
