"""
Sales App - Brownie Sales

Records every sale: who bought, how many, at what unit price, how it was
paid and which flavour. Sales are the revenue side of the ledger and the
source from which customers are derived.
"""
