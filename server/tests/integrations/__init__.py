"""
Integration test modules

Tests for the payment gateway contract, the gateway registry, account
providers, transporters and the virtual gateway adapter.
"""
