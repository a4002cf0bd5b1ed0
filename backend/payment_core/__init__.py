"""
payment-core - Atomic funds-transfer service
"""
