"""Custom exception classes for style transfer and research answering."""


class VoiceMirrorError(Exception):
    """Base exception for all service errors."""
    pass


class ValidationError(VoiceMirrorError):
    """Raised when request input fails validation."""
    pass


class FileTypeNotSupportedError(ValidationError):
    """Raised when an unsupported file type is uploaded."""
    pass


class FileSizeExceededError(ValidationError):
    """Raised when file size exceeds the maximum allowed."""
    pass


class DocumentEmptyError(ValidationError):
    """Raised when a document has no extractable content."""
    pass


class NoWritingSamplesError(ValidationError):
    """Raised when a request carries no usable writing samples."""
    pass


class ProcessingError(VoiceMirrorError):
    """Raised when request processing fails."""
    pass


class ExtractionError(ProcessingError):
    """Raised when text extraction from an upload fails."""
    pass


class NoRelevantMaterialError(ProcessingError):
    """Raised when the source material yields nothing to answer from."""
    pass


class LLMServiceError(VoiceMirrorError):
    """Raised when the text-generation API call fails."""
    pass

