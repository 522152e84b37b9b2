"""
Catering Pricing Package

Order pricing for the catering kitchens.
Resolves per-location menu prices in cents, keeps them stable for an
order flow, and computes subtotal → delivery fee → total.
"""

__version__ = "1.0.0"
