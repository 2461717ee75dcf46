"""
Selection workflow: candidate evaluation and session state.
"""

from gearsel.selector.candidates import GearboxSelector, filter_motors
from gearsel.selector.session import SelectionSession, SessionState

__all__ = ["GearboxSelector", "filter_motors", "SelectionSession", "SessionState"]
