class StudyError(Exception):
    """Base class for misuse of the study service by the host."""


class UnknownBankError(StudyError):
    def __init__(self, bank_key: str) -> None:
        super().__init__(f"Unknown question bank: {bank_key!r}")
        self.bank_key = bank_key


class BankUnavailableError(StudyError):
    def __init__(self, bank_key: str) -> None:
        super().__init__(f"Question bank {bank_key!r} has no dataset yet")
        self.bank_key = bank_key


class NoBankSelectedError(StudyError):
    def __init__(self) -> None:
        super().__init__("Select a question bank before starting a session")


class NoActiveSessionError(StudyError):
    def __init__(self) -> None:
        super().__init__("No study session is running")


class NothingToReviewError(StudyError):
    def __init__(self) -> None:
        super().__init__(
            "No questions need review! All questions have been answered correctly."
        )
