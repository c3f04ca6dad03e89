"""Allow ``python -m steam_installer``."""

from steam_installer.main import main

main()
