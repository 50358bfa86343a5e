"""
Core infrastructure for the VRC content backend: exceptions, logging,
paths, validation and CLI helpers.
"""
