"""
Rabit Knowledge Services
========================

Regulatory knowledge and compliance calculation services.

Services:
- knowledge: Regulation store, TTL cache, search, categories, context assembly
- calculators: End-of-service, GOSI, SANED and Nitaqat calculators
"""

__all__ = [
    "knowledge",
    "calculators",
]
