"""
Test suite for the Storefront Configurator.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_configurator_service.py -v
"""
