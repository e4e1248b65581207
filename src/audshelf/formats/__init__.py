# ABOUTME: Ebook format readers for audshelf.
# ABOUTME: Currently only EPUB metadata extraction via ebooklib.
