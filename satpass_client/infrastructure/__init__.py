"""Infrastructure layer: HTTP access to the satpass API and local persistence.

Nothing here depends on the UI.
"""
