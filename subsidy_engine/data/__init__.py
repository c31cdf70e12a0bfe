"""
Versioned program catalog documents
"""
