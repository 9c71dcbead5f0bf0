"""
Document Consistency Validator — cross-checks identity/financial documents.

Architecture: Per-document pre-check → Field checkers (name, DOB, address) → Verdict
Philosophy:  Each document may pass on its own. Only the set tells the truth.
"""

__version__ = "1.0.0"
