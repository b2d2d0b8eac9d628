"""Configuration version definitions.

Each version module contains the complete document shape for that version:
- ``VERSION``, the apiVersion it is registered under
- ``SkaffoldConfig``, its root model (calling it builds the zero-value document)
- ``SkaffoldConfig.upgrade``, the transform into the next version of its lineage

Unchanged sub-models are imported from the version that introduced them.
"""
