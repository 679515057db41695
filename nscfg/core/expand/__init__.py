"""Expansion entry points.

`target_cfg` (item level, every matching arm kept), `match_cfg` (function
scope, first match wins) and `meta_cfg` (single predicate attribute, a
one-arm `target_cfg`).
"""
