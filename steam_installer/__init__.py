"""Steam installer — distribution-aware Steam provisioning for Linux hosts."""

__version__ = "0.1.0"
