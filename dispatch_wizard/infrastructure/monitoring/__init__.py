"""
Monitoring package.
"""
