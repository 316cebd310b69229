"""Terminal entry points"""
