"""
Error kinds for the item ingestion pipeline

EmptyInput is surfaced to the caller. Capability errors come from the
external AI-backed collaborators (storage enrichment, free-form parsing) and
are always caught where those collaborators are invoked.
"""


class IngestionError(Exception):
    """Base class for ingestion pipeline errors"""
    pass


class EmptyInput(IngestionError):
    """Raised when raw input text is blank after trimming"""
    pass


class CapabilityError(IngestionError):
    """Raised when an external capability (enrichment, free-form parsing) fails"""
    pass


class ServiceUnavailable(CapabilityError):
    """External service unreachable, not configured, or returned an error status"""
    pass


class InvalidResponse(CapabilityError):
    """External service answered, but the payload could not be used"""
    pass


class Timeout(CapabilityError):
    """External service did not answer in time"""
    pass
