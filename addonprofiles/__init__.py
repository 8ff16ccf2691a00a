"""
Addon profile management: read profiles from the AddonProfilesDB
SavedVariables file and apply one by rewriting AddOns.txt.
"""

__version__ = "0.1.0"
