"""
Test helper utilities for ROVOCS testing.

This module provides reusable utilities for generating synthetic
reading streams and pre-stabilized analyzers.
"""
