"""
AutoCRM client: booking wizard and REST API services for the vehicle-service CRM.
"""

__version__ = "1.0.0"
