"""
Desktop front-end: input panel, live chart view and PNG export.
"""
