"""
Accounts App - Ledger Owners

Email and password accounts with JWT authentication. Every purchase, sale
and customer belongs to one account; records from before accounts existed
can be claimed by an account (see services/legacy_migration.py).
"""
