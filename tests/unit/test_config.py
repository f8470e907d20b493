from certprep.config import QUESTION_BANKS, CertificationTier, StudyConfig


class TestQuestionBanks:
    def test_bank_keys_are_unique(self):
        keys = [b.key for b in QUESTION_BANKS]
        assert len(keys) == len(set(keys))

    def test_available_banks(self):
        keys = {b.key for b in StudyConfig.available_banks()}
        assert keys == {"genai", "pde", "pmle"}

    def test_get_bank(self):
        bank = StudyConfig.get_bank("pmle")

        assert bank is not None
        assert bank.name == "Machine Learning Engineer"
        assert bank.tier is CertificationTier.PROFESSIONAL
        assert bank.color == "#4285F4"

    def test_get_bank_unknown_returns_none(self):
        assert StudyConfig.get_bank("nope") is None

    def test_banks_by_tier(self):
        foundational = StudyConfig.banks_by_tier(CertificationTier.FOUNDATIONAL)
        assert [b.key for b in foundational] == ["cdl", "genai"]

    def test_every_tier_has_label_and_description(self):
        for tier in CertificationTier:
            assert tier.label
            assert tier.description
            assert tier.color.startswith("#")


class TestStudyConfig:
    def test_reinsert_window_is_valid(self):
        assert 0 < StudyConfig.REINSERT_MIN_GAP <= StudyConfig.REINSERT_MAX_GAP

    def test_draw_thresholds_are_ordered(self):
        assert (
            0
            < StudyConfig.INCORRECT_DRAW_THRESHOLD
            < StudyConfig.UNSEEN_DRAW_THRESHOLD
            <= 1
        )

    def test_default_bank_is_available(self):
        bank = StudyConfig.get_bank(StudyConfig.DEFAULT_BANK_KEY)
        assert bank is not None and bank.available

    def test_performance_key(self):
        assert StudyConfig.performance_key("pmle") == "flashcard-performance-pmle"
        assert StudyConfig.performance_key(None) == "flashcard-performance"
