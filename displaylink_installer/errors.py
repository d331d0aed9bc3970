from __future__ import annotations


class InstallerError(Exception):
    """Base class for every error that ends an installer run."""

    exit_code = 1


class NotPrivilegedError(InstallerError, PermissionError):
    pass


class UnsupportedPlatformError(InstallerError):
    pass


class AlreadyInstalledError(InstallerError):
    pass


class DependencyInstallError(InstallerError):
    pass


class DownloadError(InstallerError):
    pass


class ExtractionError(InstallerError):
    pass


class InstallerNotFoundError(InstallerError):
    pass


class VendorInstallerError(InstallerError):
    pass


class VendorUninstallerError(InstallerError):
    pass


class StaleCleanupError(InstallerError):
    pass


class WorkdirError(InstallerError):
    pass


class RebootError(InstallerError):
    pass


class ConfigError(InstallerError, ValueError):
    pass


class OperationInterruptedError(InstallerError, InterruptedError):
    exit_code = 130


class WorkflowStopped(Exception):
    """Ends the workflow early as a success (nothing left to do)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
