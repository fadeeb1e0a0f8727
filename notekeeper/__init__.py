"""
Notekeeper.

- backend/: Notes API, admin list view, data access layer, configuration
"""
