# ABOUTME: Orchestration layer for the audshelf library.
# ABOUTME: Reconciliation at startup and the book-management service used by the CLI.
