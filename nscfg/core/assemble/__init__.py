"""Arm assembly.

Turns raw arms into finished guards for the two multi-arm constructs:
the item-level `target` construct, where every matching arm is kept, and the
function-scoped `match` construct, where the first matching arm wins and a
trailing `_` arm catches everything else.
"""
