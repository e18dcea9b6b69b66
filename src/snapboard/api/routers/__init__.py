"""
API routers for snapboard.
"""
