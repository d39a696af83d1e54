"""
Customers App - Customer Aggregates

Customers are never entered by hand. They are derived from sales by
case-insensitive customer name and kept in sync whenever a sale is
recorded, edited or deleted.
"""
