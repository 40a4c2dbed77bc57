"""
Scanner package: decides which files to look at and which characters to remove.
"""
