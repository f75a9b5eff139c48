"""Constants for Gridly record synchronization."""

# Header names looked up (case-insensitively) in the view CSV export
RECORD_ID_COLUMN = "Record ID"
PATH_COLUMN = "Path"

# Service-side cap on ids per DELETE request
DELETE_BATCH_SIZE = 1000

# Context values carry "File.cpp - line 12"; Gridly shows "File.cpp:12"
CONTEXT_LINE_MARKER = " - line "
CONTEXT_LINE_REPLACEMENT = ":"

TABLE_PATH_FIELD = "_path"
