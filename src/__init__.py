"""dayone-org: convert Day One JSON exports into Org-mode outlines."""

__version__ = "0.1.0"
