class OnboardingError(Exception):
    """Base exception for the onboarding progress engine."""

    pass


class InvalidEmailError(OnboardingError):
    """Raised when a progress record is keyed by an empty email."""

    pass


class InvalidStepError(OnboardingError):
    """Raised when a forced step falls outside the milestone registry."""

    def __init__(self, step: object, max_step: int):
        self.step = step
        self.max_step = max_step
        super().__init__(f"Invalid step {step!r}: must be an integer between 0 and {max_step}")
