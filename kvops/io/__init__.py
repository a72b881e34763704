"""
I/O Components
"""
