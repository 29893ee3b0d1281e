"""
Data Module

Card deck loading and grading rule audits.
"""

from .cards import Card, AuditIssue, load_cards, audit_card, audit_deck

__all__ = [
    "Card",
    "AuditIssue",
    "load_cards",
    "audit_card",
    "audit_deck",
]
