"""
Infrastructure layer: HTTP sidecar clients and retry loop.
"""
