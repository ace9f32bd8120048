"""Keyword classification of designation text.

A classifier maps category labels to keyword lists and buckets a record by the
first label whose keyword occurs in the inspected attribute. These buckets are
presentation helpers only; nothing in the write path depends on them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple


class KeywordClassifier:
    def __init__(
        self,
        categories: Mapping[str, Sequence[str]],
        attribute: str = "designation_fr",
        fallback: str = "OTHER",
    ):
        self.categories: Dict[str, Tuple[str, ...]] = {
            label: tuple(k.lower() for k in keywords) for label, keywords in categories.items()
        }
        self.attribute = attribute
        self.fallback = fallback

    @property
    def labels(self) -> list[str]:
        return [*self.categories.keys(), self.fallback]

    def classify(self, text: str | None) -> str:
        if not text:
            return self.fallback
        lowered = text.lower()
        for label, keywords in self.categories.items():
            if any(k in lowered for k in keywords):
                return label
        return self.fallback

    def matches(self, text: str | None, label: str) -> bool:
        return self.classify(text) == label

    def classify_row(self, row: Any) -> str:
        return self.classify(getattr(row, self.attribute, None))

    def counts(self, rows: Iterable[Any]) -> Dict[str, int]:
        out = {label: 0 for label in self.labels}
        for row in rows:
            out[self.classify_row(row)] += 1
        return out


REALIZATION_STATUS = KeywordClassifier(
    {
        "PLANNING": ("initial", "planification", "préparation", "conception"),
        "IN_PROGRESS": ("en cours", "actif", "exécution", "réalisation"),
        "COMPLETED": ("terminé", "achevé", "complété", "finalisé"),
        "SUSPENDED": ("suspendu", "en pause", "interrompu", "gelé"),
        "CANCELLED": ("annulé", "abandonné", "arrêté", "supprimé"),
        "UNDER_REVIEW": ("révision", "validation", "vérification", "contrôle"),
        "APPROVED": ("approuvé", "validé", "accepté", "autorisé"),
        "REJECTED": ("rejeté", "refusé", "non approuvé", "declined"),
        "ON_HOLD": ("en attente", "standby", "différé", "reporté"),
    }
)

APPROVAL_STATUS = KeywordClassifier(
    {
        "APPROVED": ("approuvé", "approved", "accepté", "validé"),
        "REJECTED": ("refusé", "rejected", "rejeté", "declined"),
        "PENDING": ("en attente", "pending", "en cours", "processing"),
        "DRAFT": ("brouillon", "draft", "temporaire"),
        "UNDER_REVIEW": ("révision", "review", "vérification"),
        "SUSPENDED": ("suspendu", "suspended", "gelé"),
    }
)

REALIZATION_NATURE = KeywordClassifier(
    {
        "INFRASTRUCTURE_NATURE": ("infrastructure", "construction", "bâtiment", "ouvrage"),
        "TECHNOLOGY_NATURE": ("technologie", "informatique", "numérique", "digital"),
        "SERVICE_NATURE": ("service", "prestation", "conseil", "consultation"),
        "MANUFACTURING_NATURE": ("fabrication", "production", "manufacturier", "industriel"),
        "RESEARCH_NATURE": ("recherche", "développement", "innovation", "r&d"),
        "ENERGY_NATURE": ("énergie", "électrique", "hydraulique", "utilities"),
        "ENVIRONMENTAL_NATURE": ("environnement", "écologique", "durable", "vert"),
        "COMMERCIAL_NATURE": ("commercial", "affaires", "business", "marché"),
        "EDUCATION_NATURE": ("éducation", "formation", "enseignement", "pédagogique"),
        "HEALTH_NATURE": ("santé", "médical", "hospitalier", "thérapeutique"),
        "TRANSPORT_NATURE": ("transport", "logistique", "mobilité", "circulation"),
        "AGRICULTURE_NATURE": ("agricole", "rural", "agronomique", "cultivation"),
    }
)

# Shared by consultation, contract and amendment phases.
PROCUREMENT_PHASE = KeywordClassifier(
    {
        "PREPARATION": ("préparation", "preparation"),
        "PUBLICATION": ("publication", "annonce"),
        "SUBMISSION": ("soumission", "dépôt"),
        "OPENING": ("ouverture", "dépouillement"),
        "EVALUATION": ("évaluation", "analyse"),
        "ADJUDICATION": ("adjudication", "attribution"),
        "NOTIFICATION": ("notification", "information"),
        "APPEAL": ("recours", "contestation"),
        "CONTRACT_SIGNATURE": ("signature", "contrat"),
    }
)
