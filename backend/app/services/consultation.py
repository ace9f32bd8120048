from datetime import date, datetime, timezone

from sqlalchemy import func

from app import models
from app.core import classifier
from app.core.errors import BusinessRuleError, ConflictError, ValidationFailedError
from app.schemas.consultation import (
    AwardMethodRead,
    ConsultationPhaseRead,
    ConsultationRead,
    ConsultationStatistics,
    ConsultationStepRead,
    FinancialStatistics,
    SubmissionRead,
    SubmissionSummary,
)
from app.services.crud import CrudService, Dependent, Reference, is_blank

MIN_CONSULTATION_DAYS = 15


class AwardMethodService(CrudService):
    model = models.AwardMethod
    read_schema = AwardMethodRead
    entity_name = "AwardMethod"
    label = "Award method"
    module = "consultation"
    fields = (
        "designation_ar",
        "designation_en",
        "designation_fr",
        "acronym_ar",
        "acronym_en",
        "acronym_fr",
    )
    required = {"designation_fr": "French designation", "acronym_fr": "French acronym"}
    unique = (("designation_fr",), ("acronym_fr",))
    dependents = (
        Dependent(
            models.Consultation,
            "award_method_id",
            "Cannot delete award method as it is used by consultations",
        ),
    )


class ConsultationPhaseService(CrudService):
    model = models.ConsultationPhase
    read_schema = ConsultationPhaseRead
    entity_name = "ConsultationPhase"
    label = "Consultation phase"
    module = "consultation"
    classifier = classifier.PROCUREMENT_PHASE
    dependents = (
        Dependent(
            models.ConsultationStep,
            "consultation_phase_id",
            "Cannot delete consultation phase as it has consultation steps",
        ),
    )


class ConsultationStepService(CrudService):
    model = models.ConsultationStep
    read_schema = ConsultationStepRead
    entity_name = "ConsultationStep"
    label = "Consultation step"
    module = "consultation"
    references = (
        Reference(
            "consultation_phase_id", models.ConsultationPhase, "Consultation phase", required=True
        ),
    )
    dependents = (
        Dependent(
            models.Consultation,
            "consultation_step_id",
            "Cannot delete consultation step as it is used by consultations",
        ),
    )
    nested = ("consultation_phase",)


class ConsultationService(CrudService):
    model = models.Consultation
    read_schema = ConsultationRead
    entity_name = "Consultation"
    label = "Consultation"
    module = "consultation"
    fields = (
        "internal_id",
        "consultation_year",
        "reference",
        "designation_ar",
        "designation_en",
        "designation_fr",
        "allocated_amount",
        "financial_estimation",
        "start_date",
        "approval_reference",
        "approval_date",
        "publish_date",
        "deadline",
        "observation",
    )
    unique = (("reference",), ("internal_id", "consultation_year"))
    references = (
        Reference("award_method_id", models.AwardMethod, "Award method"),
        Reference("budget_type_id", models.BudgetType, "Budget type"),
        Reference("realization_nature_id", models.RealizationNature, "Realization nature"),
        Reference("realization_status_id", models.RealizationStatus, "Realization status"),
        Reference("approval_status_id", models.ApprovalStatus, "Approval status"),
        Reference("realization_director_id", models.RealizationDirector, "Realization director"),
        Reference("consultation_step_id", models.ConsultationStep, "Consultation step"),
    )
    dependents = (
        Dependent(
            models.Submission, "consultation_id", "Cannot delete consultation as it has submissions"
        ),
        Dependent(
            models.Contract, "consultation_id", "Cannot delete consultation as it has contracts"
        ),
    )
    nested = (
        "award_method",
        "budget_type",
        "realization_nature",
        "realization_status",
        "approval_status",
        "realization_director",
        "consultation_step",
    )
    search_fields = (
        "reference",
        "internal_id",
        "designation_ar",
        "designation_en",
        "designation_fr",
        "observation",
    )
    order_by = "reference"

    def next_internal_id(self, year: int) -> str:
        rows = (
            self.db.query(models.Consultation.internal_id)
            .filter(models.Consultation.consultation_year == year)
            .all()
        )
        numbers = [int(r[0]) for r in rows if r[0] and str(r[0]).isdigit()]
        return "%03d" % (max(numbers, default=0) + 1)

    def prepare(self, state, entity, creating):
        if not creating:
            # numbering is assigned once; an update that omits it keeps it
            for name in ("consultation_year", "internal_id", "reference"):
                if is_blank(state.get(name)):
                    state[name] = getattr(entity, name)
        if state.get("consultation_year") is None:
            state["consultation_year"] = date.today().year
        if not (state.get("internal_id") or "").strip():
            state["internal_id"] = self.next_internal_id(state["consultation_year"])
        if not (state.get("reference") or "").strip():
            state["reference"] = f"CONS-{state['internal_id']}-{state['consultation_year']}"
        if not state.get("allocated_amount") and state.get("financial_estimation") is not None:
            state["allocated_amount"] = state["financial_estimation"]
        if creating and state.get("start_date") is None:
            state["start_date"] = date.today()

    def validate(self, state, entity, creating):
        start, deadline = state.get("start_date"), state.get("deadline")
        if start is None or deadline is None:
            return
        if start > deadline:
            raise ValidationFailedError.single("deadline", "Start date cannot be after deadline")
        if (deadline - start).days < MIN_CONSULTATION_DAYS:
            raise ValidationFailedError.single(
                "deadline", "Consultation period must be at least 15 days"
            )

    def extra_read_fields(self, entity):
        today = date.today()
        count = self.repo_for(models.Submission).count_by("consultation_id", entity.id)
        days_left = (entity.deadline - today).days if entity.deadline else None
        expired = entity.deadline is not None and entity.deadline < today
        active = (
            entity.publish_date is not None
            and entity.publish_date <= today
            and not expired
        )
        return {
            "submission_count": count,
            "days_until_deadline": days_left,
            "is_expired": expired,
            "is_active": active,
        }

    def statistics(self, year: int) -> ConsultationStatistics:
        total, allocated = (
            self.db.query(
                func.count(models.Consultation.id),
                func.coalesce(func.sum(models.Consultation.allocated_amount), 0.0),
            )
            .filter(models.Consultation.consultation_year == year)
            .one()
        )
        return ConsultationStatistics(
            year=year,
            total_consultations=total,
            total_allocated_amount=float(allocated),
            average_consultation_value=float(allocated) / total if total else 0.0,
            generated_at=datetime.now(timezone.utc),
        )


class SubmissionService(CrudService):
    model = models.Submission
    read_schema = SubmissionRead
    entity_name = "Submission"
    label = "Submission"
    module = "consultation"
    fields = ("submission_date", "financial_offer")
    required = {}
    unique = ()
    references = (
        Reference("consultation_id", models.Consultation, "Consultation", required=True),
        Reference("tender_id", models.Provider, "Provider", required=True),
        Reference("administrative_part_id", models.File, "Administrative part"),
        Reference("technical_part_id", models.File, "Technical part"),
        Reference("financial_part_id", models.File, "Financial part"),
    )
    nested = (
        "consultation",
        "tender",
        "administrative_part",
        "technical_part",
        "financial_part",
    )
    search_fields = ("submission_date", "financial_offer")
    order_by = "submission_date"

    def prepare(self, state, entity, creating):
        if creating and state.get("submission_date") is None:
            state["submission_date"] = date.today()

    def validate(self, state, entity, creating):
        offer = state.get("financial_offer")
        if offer is not None and offer < 0:
            raise ValidationFailedError.single("financial_offer", "Financial offer cannot be negative")

        pair = {"consultation_id": state["consultation_id"], "tender_id": state["tender_id"]}
        if creating:
            taken = self.repo.exists_by(**pair)
        else:
            taken = self.repo.exists_by_excluding(entity.id, **pair)
        if taken:
            raise ConflictError("Provider has already submitted to this consultation")

        consultation = self.db.get(models.Consultation, state["consultation_id"])
        if consultation is None or consultation.deadline is None:
            return
        closed = creating and consultation.deadline < date.today()
        late = (
            state["submission_date"] is not None
            and state["submission_date"] > consultation.deadline
        )
        if closed or late:
            raise BusinessRuleError("Cannot submit after consultation deadline")

    def _for_consultation(self, consultation_id: int):
        return self.repo.query().filter(models.Submission.consultation_id == consultation_id)

    def _competitive(self, consultation_id: int):
        return self._for_consultation(consultation_id).filter(models.Submission.financial_offer > 0)

    def lowest_offers(self, consultation_id: int) -> list[SubmissionRead]:
        """Submissions tied on the lowest positive offer."""
        lowest = self._competitive(consultation_id).with_entities(
            func.min(models.Submission.financial_offer)
        ).scalar()
        if lowest is None:
            return []
        rows = self.repo.list_query(
            self._for_consultation(consultation_id).filter(
                models.Submission.financial_offer == lowest
            )
        )
        return [self.to_read(r) for r in rows]

    def financial_statistics(self, consultation_id: int) -> FinancialStatistics:
        low, high, avg = self._competitive(consultation_id).with_entities(
            func.min(models.Submission.financial_offer),
            func.max(models.Submission.financial_offer),
            func.avg(models.Submission.financial_offer),
        ).one()
        return FinancialStatistics(
            min_offer=low,
            max_offer=high,
            avg_offer=float(avg) if avg is not None else None,
            total_submissions=self.count_by_parent("consultation_id", consultation_id),
            competitive_submissions=self._competitive(consultation_id).count(),
        )

    def summary(self, consultation_id: int) -> SubmissionSummary:
        total = self.count_by_parent("consultation_id", consultation_id)
        complete = (
            self._competitive(consultation_id)
            .filter(
                models.Submission.administrative_part_id.is_not(None),
                models.Submission.technical_part_id.is_not(None),
                models.Submission.financial_part_id.is_not(None),
            )
            .count()
        )
        stats = self.financial_statistics(consultation_id)
        return SubmissionSummary(
            total_submissions=total,
            complete_submissions=complete,
            competitive_submissions=stats.competitive_submissions,
            partial_submissions=total - complete,
            financial_statistics=stats,
        )
