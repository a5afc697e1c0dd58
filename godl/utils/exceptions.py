"""
Custom exceptions for the godl project
"""

class GodlError(Exception):
    """Base exception for all godl-specific errors"""
    pass

class InvalidInputError(GodlError, ValueError):
    """Raised when invalid input is provided"""
    pass

class VersionParseError(InvalidInputError):
    """Raised when a version string does not follow <major>.<minor>[.<patch>][rc<n>]"""
    pass

class InvalidURLError(InvalidInputError):
    """Raised when an invalid URL is provided"""
    pass

class ConfigValidationError(GodlError):
    """Raised when configuration validation fails"""
    pass

class SecurityError(GodlError):
    """Raised for security-related issues"""
    pass

class PlatformError(GodlError):
    """Raised for platform-specific compatibility issues"""
    pass

class VersionNotFoundError(GodlError):
    """Raised when a requested version is not in the catalog"""

    def __init__(self, version: str):
        super().__init__(f"no such version: {version}")
        self.version = version

class DownloadError(GodlError):
    """Raised for download-related errors"""
    pass

class ListingError(DownloadError):
    """Raised when the release listing cannot be fetched"""
    pass

class ArchiveError(GodlError):
    """Base class for archive extraction failures"""
    pass

class UnsupportedArchiveError(ArchiveError, ValueError):
    """Raised when an archive is neither .tar.gz nor .zip"""
    pass

class PathTraversalError(ArchiveError, SecurityError):
    """Raised when an archive entry would be written outside the destination"""

    def __init__(self, name: str, destination):
        super().__init__(f"Attempted path traversal in archive: {name!r} escapes {destination}")
        self.name = name
        self.destination = destination

class ExtractionError(ArchiveError):
    """Raised when reading the archive or writing its entries fails"""
    pass

class InstallError(GodlError):
    """Raised when an installation cannot proceed"""
    pass

class LinkError(GodlError):
    """Raised when the version alias cannot be created"""
    pass
