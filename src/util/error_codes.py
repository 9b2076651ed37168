# Validation (1xxx)
INVALID_EVENT_TYPE = 1001
INVALID_ITEM_TYPE = 1002
MISSING_EVENT_FIELDS = 1003

# Not Found (2xxx)
ORDER_NOT_FOUND = 2001

# External Service (5xxx)
CONTENT_STORE_FAILED = 5001
EMAIL_DELIVERY_FAILED = 5002

# Configuration (7xxx)
EMAIL_NOT_CONFIGURED = 7001
CONTENT_STORE_NOT_CONFIGURED = 7002

# Internal (8xxx)
ORDER_PROCESSING_FAILED = 8001
