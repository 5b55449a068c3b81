"""Domain layer (suggestion rules and value types).

Domain modules should not depend on UI or HTTP. Counter stores and other
infrastructure are injected.
"""
