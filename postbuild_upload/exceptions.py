"""Custom exceptions for postbuild-upload."""


class PostBuildUploadError(Exception):
    """Base exception for all post-build upload operations."""


class ConfigurationError(PostBuildUploadError):
    """Raised when configuration is missing or invalid."""


class FilesystemError(PostBuildUploadError):
    """Raised when the workspace or a file to upload cannot be read."""


class TransportError(PostBuildUploadError):
    """Raised when the upload request cannot be sent or its response read."""
