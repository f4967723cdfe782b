"""Build-time feature switches.

These are fixed when the package is built; nothing reads them from the
environment at runtime.
"""

QUOTA_FEATURE_ENABLED = True
