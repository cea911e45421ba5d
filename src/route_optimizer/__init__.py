"""
Delivery Route Optimizer

Single-source shortest distances over a delivery location network, with
plain, cost and time criteria and optional delivery window cutoffs.
"""

__version__ = "1.0.0"
