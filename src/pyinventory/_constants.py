"""Internal constants shared across the library."""

BASE_URL = "https://firestore.googleapis.com/v1"
USER_AGENT = "pyinventory/0 aiohttp"
COLLECTION = "inventory"
DATABASE = "(default)"

#: Document field holding the item count.
QUANTITY_FIELD = "quantity"

#: Page size used when listing the whole collection.
LIST_PAGE_SIZE = 300

#: Firestore error statuses meaning "a write precondition did not hold".
CONFLICT_STATUSES: frozenset[str] = frozenset({"FAILED_PRECONDITION", "ALREADY_EXISTS", "ABORTED"})

#: Firestore rejects document ids longer than this many UTF-8 bytes.
MAX_NAME_BYTES = 1500

#: ``StoreApiError.status`` for documents that cannot be read as an item.
MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"

# ------------------------------------------------------------------
# Notification strings shown at the operation boundary
# ------------------------------------------------------------------

MSG_EMPTY_NAME = "Item name cannot be empty."
MSG_ADDED = "Item added successfully."
MSG_REMOVED = "Item removed successfully."
MSG_DELETED = "Item deleted successfully."
MSG_ADD_FAILED = "Error adding item."
MSG_REMOVE_FAILED = "Error removing item."
MSG_DELETE_FAILED = "Error deleting item."
MSG_FETCH_FAILED = "Error fetching inventory."
