"""
Pydantic schemas used by the FastAPI API layer.

Keep request/response validation here (not in `main.py`) so it can be reused by
scripts, tests, and future routers.
"""

