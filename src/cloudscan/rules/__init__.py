"""Rule-based filename classification.

Public API:
    - RiskRule: A category of risky file names
    - DEFAULT_RULES: The built-in ordered rule table
    - Classifier: Applies a rule table to file records
"""

from cloudscan.rules.catalog import DEFAULT_RULES, RiskRule
from cloudscan.rules.classifier import Classifier

__all__ = [
    "DEFAULT_RULES",
    "Classifier",
    "RiskRule",
]
