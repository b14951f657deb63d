# inventory_api/constants/quantity.py

# Largest stock quantity every backend can store in an INTEGER column
MAX_QUANTITY = 2**31 - 1
