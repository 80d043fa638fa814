"""
Test suite for the selector store.

Focus areas:
- Key derivation determinism
- Record codec framing
- Recording and commit semantics
- Replay order
"""
