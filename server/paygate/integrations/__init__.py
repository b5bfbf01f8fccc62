"""
Integration modules for paygate

Contains adapters for external payment providers. Each provider adapter
implements the gateway contract in ``payment_gateways.base``.
"""
