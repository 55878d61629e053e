"""Sync — install discovered skills into target directories.

This package provides the primitives for:
- Cleanup: removing previously installed copies before reinstalling
- Install: copying each skill's full directory tree into a target
- State: remembering which skills a target received so dropped ones are pruned
- Targets: the IDE-specific locations skills are installed to
"""
