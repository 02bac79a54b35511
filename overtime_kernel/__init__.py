"""
Overtime Kernel

Validation and approval engine for staff overtime claims:
- Rule pipeline that decides whether a claim is legal
- Holiday multipliers and leave-day conversion
- Rolling monthly quota with allow/warn/block decisions
- Draft -> Pending -> Approved/Rejected lifecycle
- Monthly summaries recomputed from approved claims
"""

__version__ = "0.1.0"
