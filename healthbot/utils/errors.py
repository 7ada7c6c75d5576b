"""
Error taxonomy shared by the outbreak, messaging and storage layers
"""


class HealthBotError(Exception):
    """Base class for all service errors"""


class FetchFailed(HealthBotError):
    """The generative AI call failed or timed out after all retries"""


class ParseFailed(HealthBotError):
    """The AI response could not be decomposed into a disease list"""


class NoDataAvailable(HealthBotError):
    """No fresh data and no fallback cache entry for the requested scope"""


class SendFailed(HealthBotError):
    """The messaging platform rejected or failed a send"""

    def __init__(self, message, phone_number=None, status_code=None):
        super().__init__(message)
        self.phone_number = phone_number
        self.status_code = status_code


class DatabaseError(HealthBotError):
    """A store read or write failed"""
