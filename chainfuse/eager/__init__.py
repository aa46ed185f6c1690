"""
Eager fallback operations.

``arrays``, ``collection`` and ``objects`` hold conventional, fully
materializing implementations used whenever lazy fusion does not apply.
"""
