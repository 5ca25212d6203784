# core/utils.py

"""
Repository for program-wide utilities.
"""

import uuid


def generate_record_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
