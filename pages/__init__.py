"""
Server-rendered pages
"""
