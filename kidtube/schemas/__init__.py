"""
Pydantic schemas for API request and response validation.

Every endpoint declares an explicit request and response model.
"""
