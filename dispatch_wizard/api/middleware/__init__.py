"""
API middleware package.
"""
