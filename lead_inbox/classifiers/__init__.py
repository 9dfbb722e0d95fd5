"""
Email classifiers module.
"""

from lead_inbox.classifiers.base import BaseClassifier
from lead_inbox.classifiers.lead import LeadClassifier

__all__ = [
    "BaseClassifier",
    "LeadClassifier",
]
