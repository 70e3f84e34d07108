# JobPortal - Job Seeker Portal
"""
JobPortal - Job seeker portal backend.

Mock login and registration, session lifecycle, profile onboarding with
completeness tracking, and resume upload/parse simulation.
"""

__version__ = "1.0.0"
__author__ = "JobPortal"
__description__ = "Job seeker portal with session and profile tracking"
