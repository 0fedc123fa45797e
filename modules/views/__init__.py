"""
View composition for the Creator Desk pages.
Each view owns an activation scope and the components it renders.
"""

from .activation import ViewActivation
from .dashboard import DashboardView
from .generate import GenerateView

__all__ = ['ViewActivation', 'DashboardView', 'GenerateView']
