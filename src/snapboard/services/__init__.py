"""
Services for snapboard.
"""
