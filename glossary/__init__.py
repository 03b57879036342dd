"""
Tech Glossary Browser Service
"""

__version__ = "0.1.0"
