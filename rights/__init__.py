"""Jurisdiction-aware consumer-rights calculators.

Rule tables map (jurisdiction, category) to elapsed-time tiers; the
evaluator picks a tier, applies cross-cutting modifiers, and returns a
structured result. No I/O and no persistence.
"""
