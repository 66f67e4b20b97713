"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the token ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_conservation.py - Supply conservation and non-negativity
2. test_atomicity.py - All-or-nothing operation semantics
3. test_allowances.py - Overwrite and decrement-on-spend allowance laws
4. test_determinism.py - Reproducible behavior and replay

These tests use hypothesis for property-based testing.
"""
