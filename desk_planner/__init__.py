"""
Desk Planner

Monte Carlo estimation of desk demand under a hybrid work policy.
Simulates random weekly attendance many times and reports the
peak-occupancy distribution with percentile-based desk recommendations.
"""

__version__ = "0.1.0"
