"""
email_extractor
AI-assisted email discovery for single URLs and CSV batches
"""

__version__ = "1.0.0"
