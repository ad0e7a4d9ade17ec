"""Platform implementations for the resolution pipeline.

This package contains self-contained platform modules that
provide asset store implementations for different backends
(local directories, in-memory bundles, etc.).

Each platform module auto-registers itself with the StoreRegistry
when imported.
"""

# Platform modules are imported dynamically by StoreRegistry.discover_platforms()
# to handle missing dependencies gracefully
