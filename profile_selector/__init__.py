"""
AWS profile selector: pick a profile from ~/.aws/credentials, remember it,
and check that it works.
"""

__version__ = "0.1.0"
