"""
Rabit Knowledge Test Suite
==========================

Test organization:
- tests/shared/                 - Config, logging, errors and models
- tests/services/knowledge/     - Store, cache, search, categories, context
- tests/services/calculators/   - Compliance calculators

Run tests:
    pytest                              # All tests
    pytest tests/services/calculators   # Calculators only
"""
