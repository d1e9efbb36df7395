"""Report rendering for scan outcomes."""

from .generator import ReportGenerator

__all__ = ["ReportGenerator"]
