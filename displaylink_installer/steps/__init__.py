from .step_00_require_privilege import RequirePrivilegeStep
from .step_10_detect_environment import DetectEnvironmentStep
from .step_20_check_install_state import CheckInstallationStateStep
from .step_30_install_dependencies import InstallDependenciesStep
from .step_40_cleanup_stale_state import CleanupStaleStateStep
from .step_50_install_driver import InstallDriverStep
from .step_55_uninstall_driver import UninstallDriverStep
from .step_80_verify_installation import VerifyInstallationStep
from .step_85_report import ReportStep
from .step_90_prompt_reboot import PromptRebootStep

__all__ = [
    "RequirePrivilegeStep",
    "DetectEnvironmentStep",
    "CheckInstallationStateStep",
    "InstallDependenciesStep",
    "CleanupStaleStateStep",
    "InstallDriverStep",
    "UninstallDriverStep",
    "VerifyInstallationStep",
    "ReportStep",
    "PromptRebootStep",
]
