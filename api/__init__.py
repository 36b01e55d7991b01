"""
Sweet Shop API package.

Provides the FastAPI application factory; see api.app.create_app.
"""
