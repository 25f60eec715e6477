class DossierError(Exception):
    """Base error for all user-facing Dossier exceptions."""


class ConfigurationError(DossierError):
    """Raised when configuration is invalid or incomplete."""


class ProjectNotInitializedError(DossierError):
    """Raised when .dossier metadata is missing."""


class ValidationError(DossierError):
    """Raised when a download request is incomplete or malformed."""


class NotFoundError(DossierError):
    """Raised when no matching file exists or an archive would be empty."""


class StorageUnavailableError(DossierError):
    """Raised when the item or file store cannot be queried."""


class IOFailureError(DossierError):
    """Raised when a download directory or archive cannot be written."""


class AttachmentError(DossierError):
    """Raised when a file cannot be attached to an item."""
