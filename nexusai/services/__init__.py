"""
Services module - real-time notification of job changes.
"""
from nexusai.services.notifier import JobNotifier

__all__ = ["JobNotifier"]
