"""
Folio error types.

Every failure that crosses the backend boundary is raised as one of these,
carrying the service's message verbatim in ``message``.
"""


class FolioError(Exception):
    """Base class for all Folio errors"""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class BackendError(FolioError):
    """Raised by the Supabase adapter when a call fails"""


class AuthError(FolioError):
    """Sign-in rejected by the auth service"""


class RepositoryError(FolioError):
    """Project table query or write failed"""


class ProjectNotFound(RepositoryError):
    """No project row exists for the requested id"""

    def __init__(self, project_id):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class StorageError(FolioError):
    """Image upload to the storage bucket failed"""


class FormValidationError(FolioError):
    """Required form inputs are missing; nothing was written"""

    def __init__(self, missing):
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = list(missing)
