"""Test package for crime-hotspot-core.

This package contains:
- Unit tests (test_spatial.py, test_scoring.py, test_config.py)
- Integration tests (test_integration.py)
- Test configuration (conftest.py)
"""
