"""Service layer: settings merging and session bootstrap.

INVARIANT: Operations that can fail report through ServiceResult or
MergeResult instead of raising.
"""
