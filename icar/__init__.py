"""
ICAR client: API wrappers and flows for the ICAR automotive service
marketplace (car owners, garages and service bookings).
"""

__version__ = "1.0.0"
