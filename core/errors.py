# core/errors.py


class IntentParserError(Exception):
    """Base class for every error raised by the intent parser."""


class EmptyInputError(IntentParserError, ValueError):
    def __init__(self, message: str = "Input cannot be empty"):
        super().__init__(message)


class InputTooLongError(IntentParserError, ValueError):
    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(f"Input exceeds maximum length of {max_length} characters")


class LLMProviderError(IntentParserError):
    """The text-completion backend failed or is not configured."""


class LLMResponseUnparsableError(IntentParserError):
    """The completion text was not a usable JSON object."""


class ConfigurationUnavailableError(IntentParserError, RuntimeError):
    """Configuration was never loaded or failed validation."""
