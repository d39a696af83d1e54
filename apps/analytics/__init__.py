"""
Analytics App - Financial Reports

Read-only reports over an owner's ledger: financial summary, monthly
rollup, payment method and brownie type breakdowns, top customers and the
dashboard. The aggregation itself lives in analytics.py and never touches
the database.
"""
