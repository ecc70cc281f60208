"""
Payment Verification Service
Attendees submit payment proof; admins verify and check them in.
"""

__version__ = "0.1.0"
