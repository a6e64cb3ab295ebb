"""
Core enums, exceptions and models for the AutoCRM client.
"""
