"""Progress reporters for terminal output."""

from contentstash.progress.rich_progress import RichProgressReporter


__all__ = ["RichProgressReporter"]
