"""
Boundary layer.

Adapters for everything outside the process: the durable chunk log,
the repository content source and the completion service.
"""
