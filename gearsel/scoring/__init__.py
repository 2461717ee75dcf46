"""
Suitability classification of sized motor/reducer combinations.
"""

from gearsel.scoring.suitability import LOAD_FACTORS, classify, load_factor_for

__all__ = ["LOAD_FACTORS", "classify", "load_factor_for"]
