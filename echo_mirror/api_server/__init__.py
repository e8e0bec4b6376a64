"""
API server package: HTTP interface.

Builds the FastAPI app (echo routes + stage pipeline) and runs it under uvicorn.
"""
