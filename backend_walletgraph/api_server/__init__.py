"""
HTTP API server package: read-only graph endpoint built on FastAPI.
"""
