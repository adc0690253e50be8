"""
Bundled demo data.
"""
