# ABOUTME: Album archiver package - saved-feed album downloader and PDF assembler
# ABOUTME: Walks a saved-links feed backward and archives every referenced image album

__version__ = "0.1.0"
