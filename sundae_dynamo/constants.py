"""
Attribute and placeholder names shared by the receipt table entities and the
data access layer.
"""

# Primary key of the receipts table: customerId (HASH), purchaseDate (RANGE)
CUSTOMER_ID_ATTRIBUTE = "customerId"
PURCHASE_DATE_ATTRIBUTE = "purchaseDate"

SALES_TOTAL_ATTRIBUTE = "salesTotal"
SUNDAES_ATTRIBUTE = "sundaes"

KEY_ATTRIBUTES = (CUSTOMER_ID_ATTRIBUTE, PURCHASE_DATE_ATTRIBUTE)

# Bound values for the purchase date range filter
START_DATE_PLACEHOLDER = ":startDate"
END_DATE_PLACEHOLDER = ":endDate"
