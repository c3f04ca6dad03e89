"""
Installation planner — detected environment → recipe.

Selection is a closed match over ``DistroFamily``. Planning is pure:
no command runs here, so an unsupported host is rejected before the
system is touched.
"""

from __future__ import annotations

import logging
from typing import assert_never

from steam_installer.core.config.loader import InstallerConfig
from steam_installer.core.data.recipes import arch_recipe, debian_recipe, rpm_recipe
from steam_installer.core.errors import UnsupportedEnvironmentError
from steam_installer.core.models.environment import DistroFamily, HostEnvironment
from steam_installer.core.models.recipe import InstallationRecipe

logger = logging.getLogger(__name__)


def build_recipe(env: HostEnvironment, config: InstallerConfig) -> InstallationRecipe:
    """Pick the installation recipe for ``env``.

    Raises:
        UnsupportedEnvironmentError: Unknown distribution, or an RPM host
            whose release version could not be determined.
    """
    match env.family:
        case DistroFamily.DEBIAN_LIKE:
            recipe = debian_recipe(config)
        case DistroFamily.RPM_LIKE:
            if not env.version_major:
                raise UnsupportedEnvironmentError(
                    env.identity, reason="release version could not be determined",
                )
            recipe = rpm_recipe(env.identity, env.version_major)
        case DistroFamily.ARCH_LIKE:
            recipe = arch_recipe()
        case DistroFamily.UNSUPPORTED:
            raise UnsupportedEnvironmentError(env.identity)
        case _:
            assert_never(env.family)

    logger.info("Selected recipe '%s' (%d steps) for %s", recipe.name, len(recipe), env.identity)
    return recipe
