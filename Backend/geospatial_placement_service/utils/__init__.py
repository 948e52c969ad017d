"""
Configuration, logging and metrics for the placement service
"""
