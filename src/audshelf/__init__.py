# ABOUTME: audshelf - a CLI-first library manager for imported EPUB files.
# ABOUTME: Persists a JSON catalog, the EPUB binaries, and per-book cover images.
