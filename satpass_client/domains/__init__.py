"""Domain layer: the endpoint catalog and theme state.

Domain modules should not depend on UI. Storage and presentation are passed in.
"""
