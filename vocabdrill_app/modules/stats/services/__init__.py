# File: vocabdrill_app/modules/stats/services/__init__.py
"""Dashboard services package."""
from .dashboard_service import DashboardService

__all__ = ['DashboardService']
