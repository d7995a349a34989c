"""
Aspas - Local profile onboarding.

Collects a phone number, a first name and a profile picture over three
steps, then stores one profile record on-device.
"""

__version__ = "1.0.0"
