"""Routing — routes, matchers, and the declaration-order route table.

Routes are registered during setup; the per-method and per-name indexes
are rebuilt lazily on the next lookup after any change.
"""
