"""
Database package for vidshare: declarative models and migrations.
"""
