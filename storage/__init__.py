"""In-memory run history"""
