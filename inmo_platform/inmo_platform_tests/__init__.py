"""
Tests for the inmo_service package: hashing, stores, services and the HTTP API.
"""
