"""
email_extractor/errors.py
Error taxonomy shared by the CLI, the pipeline and the LLM clients
"""


class EmailExtractorError(Exception):
    """Base class for all application errors"""


class InputError(EmailExtractorError):
    """User-supplied input is unusable (bad file type, unreadable file, no URLs)"""


class ExternalServiceError(EmailExtractorError):
    """The AI service call failed or returned unparseable output for one URL"""


class ConfigurationError(EmailExtractorError):
    """Required service credentials or settings are missing or invalid"""
