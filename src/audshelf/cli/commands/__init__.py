# ABOUTME: Subcommands registered on the root audshelf click group.
# ABOUTME: One module per command, mirroring the library operations.
