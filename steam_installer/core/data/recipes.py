"""
Recipe catalog — the installation recipe for each distribution family.

Package lists are plain data. The builders only slot configuration
(download URL, package file path, release version) into the steps.
"""

from __future__ import annotations

from steam_installer.core.config.loader import InstallerConfig
from steam_installer.core.models.command import Command
from steam_installer.core.models.environment import DistroFamily
from steam_installer.core.models.recipe import (
    InstallationRecipe,
    RecipeStep,
    Severity,
    StepAction,
)

# ── Debian-like ─────────────────────────────────────────────────

APT_STEAM = ["steam"]
APT_CRITICAL_LIBS = ["libgl1:i386", "libdrm2:i386"]
APT_RECOMMENDED = ["mesa-utils", "libvulkan1", "libvulkan1:i386"]

# ── RPM-like ────────────────────────────────────────────────────

RPMFUSION_NONFREE_URL = (
    "https://mirrors.rpmfusion.org/nonfree/{branch}/"
    "rpmfusion-nonfree-release-{version}.noarch.rpm"
)
# rpmfusion publishes Fedora releases under "fedora", RHEL clones under "el".
RPMFUSION_BRANCH = {"fedora": "fedora", "centos": "el", "rhel": "el"}
DNF_STEAM_AND_LIBS = [
    "steam.x86_64",
    "steam.i686",
    "libglvnd-glx.i686",
    "libdrm.i686",
    "mesa-vulkan-drivers.i686",
]
DNF_RECOMMENDED = ["mesa-utils", "vulkan-tools"]

# ── Arch-like ───────────────────────────────────────────────────

PACMAN_STEAM_AND_LIBS = [
    "steam",
    "lib32-mesa",
    "lib32-libdrm",
    "lib32-vulkan-intel",
    "lib32-vulkan-radeon",
]
PACMAN_RECOMMENDED = ["mesa-utils", "vulkan-tools"]


def _apt_install(*packages: str) -> Command:
    return Command.of("apt", "install", "-y", *packages)


def _apt_fix_broken() -> Command:
    return Command.of("apt", "--fix-broken", "install", "-y")


def _require(binary: str, manager: str) -> RecipeStep:
    return RecipeStep(
        label=f"Check for {binary}",
        action=StepAction.REQUIRE_BINARY,
        binary=binary,
        remedy=f"{binary} command not found. This installer requires {manager}. Aborting.",
        success_message=f"{binary} found.",
    )


def _deb_fallback(config: InstallerConfig) -> InstallationRecipe:
    """Direct .deb download-and-install, used when the apt install fails."""
    dpkg_install = Command.of("dpkg", "-i", config.deb_path)

    repair = InstallationRecipe(
        name="debian-dpkg-repair",
        family=DistroFamily.DEBIAN_LIKE,
        steps=(
            RecipeStep(
                label="Fix broken dependencies (apt --fix-broken install)",
                action=StepAction.RUN_WITH_RETRY,
                command=_apt_fix_broken(),
                remedy="Please try manually: 'sudo apt --fix-broken install'. Aborting.",
                success_message="Broken dependencies resolved.",
            ),
            RecipeStep(
                label="Retry installing the downloaded Steam package",
                action=StepAction.RUN_ONCE,
                command=dpkg_install,
                remedy="Steam .deb package installation failed again. "
                "Manual intervention may be required. Aborting.",
                success_message="Steam .deb package installed.",
            ),
        ),
    )

    return InstallationRecipe(
        name="debian-deb-fallback",
        family=DistroFamily.DEBIAN_LIKE,
        steps=(
            RecipeStep(
                label="Install wget for the package download",
                action=StepAction.RUN_WITH_RETRY,
                command=_apt_install("wget"),
                skip_if_present="wget",
                remedy="Failed to install wget. Cannot download the Steam package. Aborting.",
                success_message="wget is available.",
            ),
            RecipeStep(
                label=f"Download Steam package from {config.deb_url}",
                action=StepAction.RUN_WITH_RETRY,
                command=Command.of("wget", "-O", config.deb_path, config.deb_url),
                remedy="Check the URL or your internet connection. Aborting.",
                success_message=f"Downloaded {config.deb_path}.",
            ),
            RecipeStep(
                label="Install the downloaded Steam package (dpkg -i)",
                action=StepAction.RUN_ONCE,
                command=dpkg_install,
                fallback=repair,
                success_message="Steam .deb package installed.",
            ),
        ),
    )


def debian_recipe(config: InstallerConfig) -> InstallationRecipe:
    return InstallationRecipe(
        name="debian",
        family=DistroFamily.DEBIAN_LIKE,
        steps=(
            _require("apt", "APT for Debian-based systems"),
            RecipeStep(
                label="Add i386 architecture support",
                action=StepAction.RUN_ONCE,
                command=Command.of("dpkg", "--add-architecture", "i386"),
                remedy="Check your system's dpkg configuration. Aborting.",
                success_message="i386 architecture added.",
            ),
            RecipeStep(
                label="Update package lists (apt update)",
                action=StepAction.RUN_WITH_RETRY,
                command=Command.of("apt", "update"),
                remedy="Check your internet connection or /etc/apt/sources.list. Aborting.",
                success_message="Package lists updated.",
            ),
            RecipeStep(
                label="Install 'steam' from the package repositories",
                action=StepAction.RUN_WITH_RETRY,
                command=_apt_install(*APT_STEAM),
                fallback=_deb_fallback(config),
                success_message="Steam client installed.",
            ),
            RecipeStep(
                label=f"Install essential 32-bit graphics and DRM libraries ({' '.join(APT_CRITICAL_LIBS)})",
                action=StepAction.RUN_WITH_RETRY,
                command=_apt_install(*APT_CRITICAL_LIBS),
                remedy="This will likely prevent Steam from launching correctly. Aborting.",
                success_message="Essential 32-bit libraries installed.",
            ),
            RecipeStep(
                label=f"Install recommended gaming libraries ({' '.join(APT_RECOMMENDED)})",
                action=StepAction.RUN_WITH_RETRY,
                severity=Severity.RECOMMENDED,
                command=_apt_install(*APT_RECOMMENDED),
                success_message="Recommended additional libraries installed.",
            ),
            RecipeStep(
                label="Final dependency check (apt --fix-broken install)",
                action=StepAction.RUN_WITH_RETRY,
                command=_apt_fix_broken(),
                remedy="Your system might have unresolved package issues. Aborting.",
                success_message="Final dependency check completed.",
            ),
        ),
    )


def rpmfusion_url(identity: str, version: str) -> str:
    branch = RPMFUSION_BRANCH.get(identity, "fedora")
    return RPMFUSION_NONFREE_URL.format(branch=branch, version=version)


def rpm_recipe(identity: str, version: str) -> InstallationRecipe:
    return InstallationRecipe(
        name="rpm",
        family=DistroFamily.RPM_LIKE,
        steps=(
            _require("dnf", "DNF for RPM-based systems"),
            RecipeStep(
                label="Add RPM Fusion non-free repository",
                action=StepAction.RUN_WITH_RETRY,
                command=Command.of("dnf", "install", "-y", rpmfusion_url(identity, version)),
                remedy="RPM Fusion non-free is required for Steam. Aborting.",
                success_message="RPM Fusion non-free repository added.",
            ),
            RecipeStep(
                label="Update system packages (dnf update --refresh)",
                action=StepAction.RUN_WITH_RETRY,
                severity=Severity.RECOMMENDED,
                command=Command.of("dnf", "update", "--refresh", "-y"),
                success_message="System packages updated.",
            ),
            RecipeStep(
                label="Install Steam and 32-bit libraries",
                action=StepAction.RUN_WITH_RETRY,
                command=Command.of("dnf", "install", "-y", *DNF_STEAM_AND_LIBS),
                remedy="Manual intervention may be required. Aborting.",
                success_message="Steam and essential 32-bit libraries installed.",
            ),
            RecipeStep(
                label=f"Install recommended gaming libraries ({' '.join(DNF_RECOMMENDED)})",
                action=StepAction.RUN_WITH_RETRY,
                severity=Severity.RECOMMENDED,
                command=Command.of("dnf", "install", "-y", *DNF_RECOMMENDED),
                success_message="Recommended additional libraries installed.",
            ),
        ),
    )


def arch_recipe() -> InstallationRecipe:
    return InstallationRecipe(
        name="arch",
        family=DistroFamily.ARCH_LIKE,
        steps=(
            _require("pacman", "pacman for Arch-based systems"),
            RecipeStep(
                label="Enable the multilib repository",
                action=StepAction.ENABLE_MULTILIB,
                success_message="Multilib repository enabled.",
            ),
            RecipeStep(
                label="Update package lists (pacman -Sy)",
                action=StepAction.RUN_WITH_RETRY,
                command=Command.of("pacman", "-Sy", "--noconfirm"),
                remedy="Check your internet connection or /etc/pacman.conf. "
                "Ensure multilib is correctly enabled. Aborting.",
                success_message="Package lists updated.",
            ),
            RecipeStep(
                label="Install Steam and 32-bit libraries",
                action=StepAction.RUN_WITH_RETRY,
                command=Command.of("pacman", "-S", "--noconfirm", *PACMAN_STEAM_AND_LIBS),
                remedy="Manual intervention may be required. Aborting.",
                success_message="Steam and essential 32-bit libraries installed.",
            ),
            RecipeStep(
                label=f"Install recommended gaming libraries ({' '.join(PACMAN_RECOMMENDED)})",
                action=StepAction.RUN_WITH_RETRY,
                severity=Severity.RECOMMENDED,
                command=Command.of("pacman", "-S", "--noconfirm", *PACMAN_RECOMMENDED),
                success_message="Recommended additional libraries installed.",
            ),
        ),
    )
