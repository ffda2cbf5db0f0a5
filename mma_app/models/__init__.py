"""
Result models module.

Immutable snapshots bundling analytics computed for one order book and/or
one trade batch.
"""
