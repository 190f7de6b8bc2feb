"""
HTTP API for GenHPP (FastAPI).
"""
