"""
Purchases App - Inventory Purchase Records

Records every batch of brownies (or ingredients) bought for the business.
Purchases are the investment side of the ledger: their totals feed the
financial summary and the monthly reports.

Architecture:
- Models: Purchase
- Services: create/list/get/update/delete, all scoped to one owner
- Views: RESTful API with a ViewSet
- Exceptions: Domain exception hierarchy in services/exceptions.py
"""
