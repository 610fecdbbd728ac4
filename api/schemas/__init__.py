"""
API Schemas - Pydantic models for response envelopes

Item bodies themselves are arbitrary JSON and are not validated.
"""
