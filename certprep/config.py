from enum import Enum
from typing import Final, NamedTuple


class CertificationTier(Enum):
    # Enum Member = ("Tier Name", "Colour", "Description")
    FOUNDATIONAL = (
        "Foundational",
        "#34A853",
        "Validates broad knowledge of cloud concepts and Google Cloud products, "
        "services, and tools.",
    )
    ASSOCIATE = (
        "Associate",
        "#FBBC05",
        "Validates fundamental skills to deploy and maintain cloud projects.",
    )
    PROFESSIONAL = (
        "Professional",
        "#4285F4",
        "Validates advanced skills in design, implementation, and management.",
    )

    def __init__(self, label: str, color: str, description: str):
        self.label = label
        self.color = color
        self.description = description


class QuestionBank(NamedTuple):
    key: str
    name: str
    short_name: str
    tier: CertificationTier
    dataset: str | None  # None means unavailable

    @property
    def available(self) -> bool:
        return self.dataset is not None

    @property
    def color(self) -> str:
        return self.tier.color


QUESTION_BANKS: Final[list[QuestionBank]] = [
    # Foundational
    QuestionBank("cdl", "Cloud Digital Leader", "CDL", CertificationTier.FOUNDATIONAL, None),
    QuestionBank("genai", "Generative AI Leader", "GenAI", CertificationTier.FOUNDATIONAL, "genai.json"),
    # Associate
    QuestionBank("ace", "Cloud Engineer", "ACE", CertificationTier.ASSOCIATE, None),
    QuestionBank("adp", "Data Practitioner", "ADP", CertificationTier.ASSOCIATE, None),
    QuestionBank("agwa", "Google Workspace Administrator", "AGWA", CertificationTier.ASSOCIATE, None),
    # Professional
    QuestionBank("pca", "Cloud Architect", "PCA", CertificationTier.PROFESSIONAL, None),
    QuestionBank("pcde", "Cloud Database Engineer", "PCDE", CertificationTier.PROFESSIONAL, None),
    QuestionBank("pcd", "Cloud Developer", "PCD", CertificationTier.PROFESSIONAL, None),
    QuestionBank("pde", "Data Engineer", "PDE", CertificationTier.PROFESSIONAL, "pde.json"),
    QuestionBank("pcdo", "Cloud DevOps Engineer", "PCDO", CertificationTier.PROFESSIONAL, None),
    QuestionBank("pcse", "Cloud Security Engineer", "PCSE", CertificationTier.PROFESSIONAL, None),
    QuestionBank("pcne", "Cloud Network Engineer", "PCNE", CertificationTier.PROFESSIONAL, None),
    QuestionBank("pmle", "Machine Learning Engineer", "PMLE", CertificationTier.PROFESSIONAL, "pmle.json"),
    QuestionBank("psoe", "Security Operations Engineer", "PSOE", CertificationTier.PROFESSIONAL, None),
]


class StudyConfig:
    # --- Re-insertion (leech) scheduling ---
    REINSERT_MIN_GAP: Final[int] = 4
    REINSERT_MAX_GAP: Final[int] = 10

    # --- Weighted session ordering ---
    # Cumulative thresholds on a single uniform roll per draw.
    INCORRECT_DRAW_THRESHOLD: Final[float] = 0.5
    UNSEEN_DRAW_THRESHOLD: Final[float] = 0.8
    LEAD_SEGMENT_DIVISOR: Final[int] = 3

    # --- Identifiers & Storage ---
    LEGACY_ID_PREFIX: Final[str] = "q-"
    PERFORMANCE_KEY_PREFIX: Final[str] = "flashcard-performance"
    LEGACY_PERFORMANCE_KEYS: Final[list[str]] = [
        "flashcard-performance",
        "flashcard-performance-mle",
    ]
    LAST_BANK_KEY: Final[str] = "last-used-bank"
    DEFAULT_BANK_KEY: Final[str] = "pmle"
    DB_PATH = "data/certprep.db"

    @staticmethod
    def performance_key(bank_key: str | None) -> str:
        """Storage key holding the serialized store of one bank."""
        if not bank_key:
            return StudyConfig.PERFORMANCE_KEY_PREFIX
        return f"{StudyConfig.PERFORMANCE_KEY_PREFIX}-{bank_key}"

    @staticmethod
    def get_bank(bank_key: str) -> QuestionBank | None:
        for bank in QUESTION_BANKS:
            if bank.key == bank_key:
                return bank
        return None

    @staticmethod
    def available_banks() -> list[QuestionBank]:
        return [b for b in QUESTION_BANKS if b.available]

    @staticmethod
    def banks_by_tier(tier: CertificationTier) -> list[QuestionBank]:
        return [b for b in QUESTION_BANKS if b.tier is tier]
