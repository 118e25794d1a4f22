"""
txnet: business transaction network service.

A relational store of businesses, a graph store of transactions between
them, and an API that keeps connected clients updated as transactions land.
"""

__version__ = "1.0.0"
