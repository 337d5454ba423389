"""
Domain layer: value objects, exceptions and service interfaces.
"""
