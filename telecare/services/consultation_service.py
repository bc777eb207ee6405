"""Consultation service: lifecycle writes and joined views."""

from datetime import UTC, datetime
from typing import Any

import structlog
from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.exceptions import NotFoundException
from telecare.core.lifecycle import ConsultationStatus, ensure_transition
from telecare.models.accounts import accounts
from telecare.models.consultations import consultations
from telecare.schemas.consultations import (
    ConsultationCancel,
    ConsultationComplete,
    ConsultationCreate,
    ConsultationUpdate,
)
from telecare.services.account_service import account_columns, nest_prefixed
from telecare.services.doctor_service import DoctorService

logger = structlog.get_logger(__name__)

PATIENT_PREFIX = "patient__"
DOCTOR_PREFIX = "doctor__"

patient_accounts = accounts.alias("patient")
doctor_accounts = accounts.alias("doctor")


class ConsultationService:
    """Service for managing consultations."""

    def __init__(self, db: AsyncSession, doctor_service: DoctorService | None = None):
        """Initialize service with database session."""
        self.db = db
        self.doctors = doctor_service or DoctorService()

    async def create_consultation(self, data: ConsultationCreate) -> dict:
        """
        Request a consultation with a doctor.

        The doctor's availability and verification are re-checked in the same
        transaction as the insert, so a doctor who went offline after the
        patient saw the list cannot be booked.

        Raises:
            NotFoundException: If the patient or doctor does not exist
            ProviderUnavailableException: If the doctor is no longer bookable
        """
        patient = await self.db.execute(select(accounts.c.id).where(accounts.c.id == data.patient_id))
        if not patient.first():
            raise NotFoundException("Patient not found")

        await self.doctors.lock_bookable_profile(self.db, data.doctor_id)

        stmt = (
            insert(consultations)
            .values(
                patient_id=data.patient_id,
                doctor_id=data.doctor_id,
                type=data.type.value,
                symptoms=data.symptoms,
                scheduled_at=data.scheduled_at,
                status=ConsultationStatus.PENDING.value,
            )
            .returning(consultations)
        )
        result = await self.db.execute(stmt)
        consultation = dict(result.mappings().one())
        await self.db.commit()

        logger.info(
            "consultation_created",
            consultation_id=consultation["id"],
            patient_id=data.patient_id,
            doctor_id=data.doctor_id,
            type=data.type.value,
        )
        return consultation

    def _detail_query(self):
        return (
            select(
                consultations,
                *account_columns(patient_accounts, PATIENT_PREFIX),
                *account_columns(doctor_accounts, DOCTOR_PREFIX),
            )
            .join(patient_accounts, consultations.c.patient_id == patient_accounts.c.id)
            .join(doctor_accounts, consultations.c.doctor_id == doctor_accounts.c.id)
        )

    @staticmethod
    def _nest(row: Any) -> dict:
        record = nest_prefixed(dict(row), PATIENT_PREFIX, "patient")
        return nest_prefixed(record, DOCTOR_PREFIX, "doctor")

    async def get_consultation(self, consultation_id: int) -> dict:
        """
        Get a consultation with both participants.

        Raises:
            NotFoundException: If consultation not found
        """
        result = await self.db.execute(
            self._detail_query().where(consultations.c.id == consultation_id)
        )
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Consultation not found")

        return self._nest(row)

    async def list_for_patient(self, patient_id: int) -> list[dict]:
        """A patient's consultations, newest first, with the doctor attached."""
        result = await self.db.execute(
            self._detail_query()
            .where(consultations.c.patient_id == patient_id)
            .order_by(consultations.c.created_at.desc(), consultations.c.id.desc())
        )
        return [self._nest(row) for row in result.mappings().all()]

    async def list_for_doctor(self, doctor_id: int) -> list[dict]:
        """A doctor's consultations, newest first, with the patient attached."""
        result = await self.db.execute(
            self._detail_query()
            .where(consultations.c.doctor_id == doctor_id)
            .order_by(consultations.c.created_at.desc(), consultations.c.id.desc())
        )
        return [self._nest(row) for row in result.mappings().all()]

    async def list_pending(self) -> list[dict]:
        """Consultations waiting for a doctor, oldest first."""
        result = await self.db.execute(
            self._detail_query()
            .where(consultations.c.status == ConsultationStatus.PENDING.value)
            .order_by(consultations.c.created_at.asc(), consultations.c.id.asc())
        )
        return [self._nest(row) for row in result.mappings().all()]

    async def _write(
        self,
        consultation_id: int,
        target: ConsultationStatus | None,
        values: dict[str, Any],
    ) -> dict:
        """
        Apply a write under a row lock after checking the transition table.

        Entering ``active`` stamps ``started_at``; entering a terminal state
        stamps ``ended_at``.
        """
        result = await self.db.execute(
            select(consultations).where(consultations.c.id == consultation_id).with_for_update()
        )
        current = result.mappings().first()

        if not current:
            raise NotFoundException("Consultation not found")

        current_status = ConsultationStatus(current["status"])
        changes_status = ensure_transition(current_status, target)

        now = datetime.now(UTC)
        if changes_status:
            values["status"] = target.value
            if target == ConsultationStatus.ACTIVE:
                values["started_at"] = now
            else:
                values["ended_at"] = now

        if not values:
            return dict(current)

        values["updated_at"] = now

        result = await self.db.execute(
            update(consultations)
            .where(consultations.c.id == consultation_id)
            .values(**values)
            .returning(consultations)
        )
        consultation = dict(result.mappings().one())
        await self.db.commit()

        if changes_status:
            logger.info(
                "consultation_status_changed",
                consultation_id=consultation_id,
                old_status=current_status.value,
                new_status=target.value,
            )

        return consultation

    async def update_consultation(self, consultation_id: int, data: ConsultationUpdate) -> dict:
        """
        Partially update a consultation.

        A status in the payload goes through the transition table; the other
        fields are written as given.

        Raises:
            NotFoundException: If consultation not found
            IllegalTransitionException: If the status change is not allowed
                or the consultation is already closed
        """
        values = data.model_dump(exclude_unset=True, exclude={"status"})
        values = {field: value for field, value in values.items() if value is not None}
        return await self._write(consultation_id, data.status, values)

    async def accept_consultation(self, consultation_id: int) -> dict:
        """Doctor accepts a pending consultation."""
        return await self._write(consultation_id, ConsultationStatus.ACTIVE, {})

    async def complete_consultation(
        self, consultation_id: int, data: ConsultationComplete
    ) -> dict:
        """Close an active consultation with its clinical outcome."""
        return await self._write(
            consultation_id,
            ConsultationStatus.COMPLETED,
            {
                "diagnosis": data.diagnosis,
                "prescription": data.prescription,
                "notes": data.notes,
            },
        )

    async def cancel_consultation(self, consultation_id: int, data: ConsultationCancel) -> dict:
        """Cancel a consultation that has not finished."""
        values = {"notes": data.notes} if data.notes is not None else {}
        return await self._write(consultation_id, ConsultationStatus.CANCELLED, values)
